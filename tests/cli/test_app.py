from unittest.mock import MagicMock, patch


class TestBuildServices:
    @patch("dormkeep.cli.app.get_audit_log_repository")
    @patch("dormkeep.cli.app.get_user_repository")
    @patch("dormkeep.cli.app.get_settings_repository")
    @patch("dormkeep.cli.app.get_tenant_repository")
    @patch("dormkeep.cli.app.get_billing_repository")
    @patch("dormkeep.cli.app.get_occupancy_repository")
    @patch("dormkeep.cli.app.get_room_repository")
    def test_returns_correct_types(self, *mocks):
        from dormkeep.cli.app import Services, _build_services
        from dormkeep.services.audit_service import AuditService
        from dormkeep.services.billing_service import BillingService
        from dormkeep.services.room_service import RoomService
        from dormkeep.services.settings_service import SettingsService
        from dormkeep.services.tenant_service import TenantService
        from dormkeep.services.user_service import UserService

        services = _build_services()
        assert isinstance(services, Services)
        assert isinstance(services.billing, BillingService)
        assert isinstance(services.rooms, RoomService)
        assert isinstance(services.tenants, TenantService)
        assert isinstance(services.settings, SettingsService)
        assert isinstance(services.users, UserService)
        assert isinstance(services.audit, AuditService)

    @patch("dormkeep.cli.app.get_audit_log_repository")
    @patch("dormkeep.cli.app.get_user_repository")
    @patch("dormkeep.cli.app.get_settings_repository")
    @patch("dormkeep.cli.app.get_tenant_repository")
    @patch("dormkeep.cli.app.get_billing_repository")
    @patch("dormkeep.cli.app.get_occupancy_repository")
    @patch("dormkeep.cli.app.get_room_repository")
    def test_services_share_room_repository(self, mock_room_repo, *mocks):
        from dormkeep.cli.app import _build_services

        services = _build_services()
        assert services.billing.room_repo is services.rooms.room_repo
        assert services.tenants.room_repo is services.rooms.room_repo


class TestMainMenu:
    @patch("dormkeep.cli.app._build_services")
    @patch("dormkeep.cli.app.questionary")
    def test_exit_immediately(self, mock_q, mock_build):
        from dormkeep.cli.app import main_menu

        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.return_value = "Exit"

        main_menu()
        mock_q.select.return_value.ask.assert_called_once()

    @patch("dormkeep.cli.app._build_services")
    @patch("dormkeep.cli.app.questionary")
    def test_none_exits(self, mock_q, mock_build):
        from dormkeep.cli.app import main_menu

        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.return_value = None

        main_menu()

    @patch("dormkeep.cli.app.run_monthly_billing_menu")
    @patch("dormkeep.cli.app._build_services")
    @patch("dormkeep.cli.app.questionary")
    def test_run_billing_then_exit(self, mock_q, mock_build, mock_run):
        from dormkeep.cli.app import main_menu

        services = MagicMock()
        mock_build.return_value = services
        mock_q.select.return_value.ask.side_effect = ["Run Monthly Billing", "Exit"]

        main_menu()
        mock_run.assert_called_once_with(services.billing, services.rooms, services.settings, services.audit)

    @patch("dormkeep.cli.app.list_billings_menu")
    @patch("dormkeep.cli.app._build_services")
    @patch("dormkeep.cli.app.questionary")
    def test_list_bills_then_exit(self, mock_q, mock_build, mock_list):
        from dormkeep.cli.app import main_menu

        services = MagicMock()
        mock_build.return_value = services
        mock_q.select.return_value.ask.side_effect = ["List Bills", "Exit"]

        main_menu()
        mock_list.assert_called_once_with(services.billing, services.settings, services.audit)

    @patch("dormkeep.cli.app.tenant_management_menu")
    @patch("dormkeep.cli.app.room_management_menu")
    @patch("dormkeep.cli.app._build_services")
    @patch("dormkeep.cli.app.questionary")
    def test_rooms_and_tenants(self, mock_q, mock_build, mock_rooms, mock_tenants):
        from dormkeep.cli.app import main_menu

        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.side_effect = ["Rooms", "Tenants", "Exit"]

        main_menu()
        mock_rooms.assert_called_once()
        mock_tenants.assert_called_once()
