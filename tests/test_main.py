import main
from services.dashboard_service import DashboardService
from utils.constants import API_URLS


def test_build_services_wires_configured_backend(tmp_path):
    services = main.build_services({
        "environment": "production",
        "session_file": str(tmp_path / "session.json"),
    })
    assert set(services) == {"auth", "expenses", "sheet", "emis", "lending", "savings", "dashboard"}
    assert isinstance(services["dashboard"], DashboardService)
    assert services["sheet"]._api._client.base_url == API_URLS["production"]
    assert not services["auth"].is_authenticated


def test_parser_sheet_options():
    args = main.build_parser().parse_args(["sheet", "--month", "2", "--year", "2024"])
    assert args.func is main.cmd_sheet
    assert (args.month, args.year, args.csv) == (2, 2024, None)


def test_validation_error_exits_with_one(monkeypatch, capsys):
    class FailingSheet:
        def get_sheet(self, month, year):
            raise ValueError("Invalid month")

    monkeypatch.setattr(main, "build_services", lambda: {"sheet": FailingSheet()})
    assert main.main(["sheet"]) == 1
    assert "Invalid month" in capsys.readouterr().err
