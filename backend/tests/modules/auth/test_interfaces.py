from modules.auth.interfaces import IAuthService
from modules.auth.service import AuthService

INTERFACE_METHODS = [
    "register",
    "login",
    "admin_login",
    "login_with_google_token",
    "login_with_google",
    "select_role",
    "change_password",
    "get_user",
    "password_requirements",
]


class TestAuthInterface:
    def test_interface_methods_exist(self):
        """IAuthService should define required methods."""
        for method in INTERFACE_METHODS:
            assert hasattr(IAuthService, method)

    def test_auth_service_has_interface_methods(self):
        """AuthService should have all IAuthService methods."""
        for method in INTERFACE_METHODS:
            assert hasattr(AuthService, method)
            assert callable(getattr(AuthService, method))

    def test_service_instance_satisfies_protocol(self, user_repository, passwords, token_service):
        """runtime_checkable isinstance() should accept the implementation."""
        service = AuthService(user_repository, passwords, token_service)
        assert isinstance(service, IAuthService)
