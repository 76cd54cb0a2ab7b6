from decimal import Decimal

import pytest

from storefront.domain.errors import AlreadyExistsError, NotFoundError
from storefront.domain.schemas import UserCreate
from storefront.services.user_service import UserService
from tests.conftest import DEFAULT_ADDRESS


@pytest.fixture()
def service(db, config):
    return UserService(db, config)


class TestRegistration:
    def test_new_user_gets_default_wallet_and_address(self, service):
        user = service.create_user(UserCreate(name="crio-user", email="crio-user@example.com"))

        assert user.id is not None
        assert user.wallet_money == Decimal("500")
        assert user.address == DEFAULT_ADDRESS

    def test_email_is_stored_lowercase(self, service):
        user = service.create_user(UserCreate(name="crio-user", email="Crio-User@Example.COM"))

        assert user.email == "crio-user@example.com"

    def test_duplicate_email_ignores_case(self, service):
        service.create_user(UserCreate(name="first", email="dup@example.com"))

        with pytest.raises(AlreadyExistsError) as exc:
            service.create_user(UserCreate(name="second", email="DUP@example.com"))

        assert exc.value.message == "Email already taken"


class TestLookup:
    def test_get_user(self, service):
        created = service.create_user(UserCreate(name="crio-user", email="crio-user@example.com"))

        assert service.get_user(created.id).email == "crio-user@example.com"
        assert service.get_user_by_email("CRIO-USER@example.com").id == created.id

    def test_missing_user(self, service):
        with pytest.raises(NotFoundError):
            service.get_user(404)
        with pytest.raises(NotFoundError):
            service.get_user_by_email("nobody@example.com")


class TestAddress:
    def test_set_address(self, service):
        created = service.create_user(UserCreate(name="crio-user", email="crio-user@example.com"))

        address = service.set_address(created.id, "  221B Baker Street, London  ")

        assert address == "221B Baker Street, London"
        assert service.get_address(created.id) == {
            "id": created.id,
            "email": "crio-user@example.com",
            "address": "221B Baker Street, London",
        }

    def test_set_address_for_missing_user(self, service):
        with pytest.raises(NotFoundError):
            service.set_address(404, "221B Baker Street, London")
