import pytest
from django.contrib.auth import get_user_model

User = get_user_model()

pytestmark = pytest.mark.django_db


def test_create_user_normalizes_email_and_defaults_to_patient():
    user = User.objects.create_user(email="Ann@Example.COM", password="secret123", name="Ann")

    assert user.email == "Ann@example.com"
    assert user.role == "patient"
    assert user.is_patient
    assert user.check_password("secret123")
    assert str(user) == "Ann"


def test_email_is_required():
    with pytest.raises(ValueError):
        User.objects.create_user(email="", password="x")


def test_superuser_is_a_caregiver():
    admin = User.objects.create_superuser(email="admin@example.com", password="secret123")

    assert admin.is_staff and admin.is_superuser
    assert admin.role == "caregiver"


def test_patients_manager_and_caregiver_link():
    carer = User.objects.create_user(email="carer@example.com", role="caregiver")
    patient = User.objects.create_user(email="pat@example.com", caregiver=carer)

    assert list(User.objects.patients()) == [patient]
    assert list(carer.patients.all()) == [patient]
    assert str(carer) == "carer@example.com"
