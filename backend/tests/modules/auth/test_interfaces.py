from modules.auth.interfaces import IAuthService
from modules.auth.service import AuthService
from modules.users.repository import UserRepository
from shared.config import Settings

from tests.fakes import InMemoryDocumentStore


class TestAuthInterface:
    def test_interface_methods_exist(self):
        """IAuthService should define required methods."""
        methods = ["issue_token", "validate_token", "login"]
        for method in methods:
            assert hasattr(IAuthService, method)

    def test_auth_service_has_interface_methods(self):
        """AuthService should have all IAuthService methods."""
        for method in ["issue_token", "validate_token", "login"]:
            assert callable(getattr(AuthService, method))

    def test_service_implements_interface(self):
        service = AuthService(Settings(jwt_secret="x"), UserRepository(InMemoryDocumentStore()))
        assert isinstance(service, IAuthService)

    def test_service_declares_interface(self):
        assert IAuthService in AuthService.__mro__
