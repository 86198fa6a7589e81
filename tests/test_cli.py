"""CLI unit tests for the TPV CLI."""

import json
from pathlib import Path
from typing import List

import pytest
import yaml
from click.testing import CliRunner, Result

from tier_pricing.cli import app
from tier_pricing.cli.utils.helpers import ExitCode
from tier_pricing.config_paths import ENV_CONFIG_PATH, ENV_CURRENCY
from tier_pricing.models import PricingConfig
from tier_pricing.serialization import dumps, load_config


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner for testing."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test without TPV_* variables."""
    monkeypatch.delenv(ENV_CONFIG_PATH, raising=False)
    monkeypatch.delenv(ENV_CURRENCY, raising=False)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path of a configuration file that does not exist yet."""
    return tmp_path / "pricing.json"


def invoke(runner: CliRunner, config_file: Path, args: List[str], fmt: str = "json") -> Result:
    """Invoke the CLI against ``config_file``."""
    return runner.invoke(app, ["--config", str(config_file), "--format", fmt, *args])


class TestHelpJson:
    """Test --help-json and --version."""

    def test_root_help_json(self, cli_runner: CliRunner) -> None:
        """Test --help-json at root level returns valid JSON."""
        result = cli_runner.invoke(app, ["--help-json"])

        assert result.exit_code == 0
        help_data = json.loads(result.output)
        assert help_data["command"] == "tpv"
        assert set(help_data["commands"]) == {"curve", "chart", "tiers", "config", "currencies"}
        assert help_data["exit_codes"]["3"] == "Tier not found"
        assert "TPV_CONFIG_PATH" in help_data["environment_variables"]

    def test_version(self, cli_runner: CliRunner) -> None:
        """--version prints the version and exits."""
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "TPV CLI version:" in result.output


class TestCurveCommand:
    """Test the curve and chart commands."""

    def test_curve_json_defaults(self, cli_runner: CliRunner, config_file: Path) -> None:
        """A missing configuration file yields the default schedule."""
        result = invoke(cli_runner, config_file, ["curve"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["currency"] == "USD"
        assert data["count"] == 10
        assert data["points"][0] == {"units": 0, "cumulative": 0, "average": None, "current": 0}
        assert data["points"][-1]["units"] == 3000
        assert data["points"][-1]["cumulative"] == pytest.approx(11300)

    def test_curve_csv(self, cli_runner: CliRunner, config_file: Path) -> None:
        """CSV output has a header and one row per breakpoint."""
        result = invoke(cli_runner, config_file, ["curve"], fmt="csv")

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0] == "units,cumulative,average,current"
        assert len(lines) == 11

    def test_curve_yaml(self, cli_runner: CliRunner, config_file: Path) -> None:
        """YAML output carries the same structure as JSON."""
        result = invoke(cli_runner, config_file, ["curve"], fmt="yaml")

        assert result.exit_code == 0
        assert yaml.safe_load(result.output)["count"] == 10

    def test_curve_table(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Table output renders a Rich table."""
        result = invoke(cli_runner, config_file, ["curve"], fmt="table")

        assert result.exit_code == 0
        assert "Pricing Curve" in result.output
        assert "$11,300.00" in result.output

    def test_curve_output_file(self, cli_runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
        """--output writes the curve to a file."""
        output = tmp_path / "curve.json"
        result = invoke(cli_runner, config_file, ["curve", "--output", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["count"] == 10

    def test_curve_uses_stored_configuration(self, cli_runner: CliRunner, config_file: Path) -> None:
        """A stored floor is reflected in the curve."""
        config_file.write_text(dumps(PricingConfig.default().replace(mrr=5000)), encoding="utf-8")
        result = invoke(cli_runner, config_file, ["curve"])

        assert result.exit_code == 0
        points = json.loads(result.output)["points"]
        assert points[0]["cumulative"] == 5000
        assert all(p["cumulative"] >= 5000 for p in points)

    def test_corrupt_configuration(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Unreadable configuration files map to the config source exit code."""
        config_file.write_text("{not json", encoding="utf-8")
        result = invoke(cli_runner, config_file, ["curve"])

        assert result.exit_code == ExitCode.CONFIG_SOURCE_ERROR
        assert "Error:" in result.output

    def test_chart(self, cli_runner: CliRunner, config_file: Path) -> None:
        """The chart command describes three series."""
        result = invoke(cli_runner, config_file, ["chart"])

        assert result.exit_code == 0
        spec = json.loads(result.output)
        assert len(spec["datasets"]) == 3
        assert spec["axes"]["cumulative"]["title"] == "Cumulative Price ($)"

    def test_chart_table_falls_back_to_json(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Table format falls back to JSON for the chart."""
        result = invoke(cli_runner, config_file, ["chart"], fmt="table")

        assert result.exit_code == 0
        assert json.loads(result.output)["type"] == "line"

    def test_chart_yaml_unsupported(self, cli_runner: CliRunner, config_file: Path) -> None:
        """YAML is rejected for the chart."""
        result = invoke(cli_runner, config_file, ["chart"], fmt="yaml")
        assert result.exit_code == ExitCode.INVALID_USAGE


class TestTiersCommands:
    """Test tier listing and editing."""

    def test_list(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Tiers are listed with their 1-based index."""
        result = invoke(cli_runner, config_file, ["tiers", "list"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["count"] == 3
        assert data["tiers"][0]["index"] == 1
        assert data["tiers"][2]["multiplier"] == "infinity"
        assert data["tiers"][2]["multiplierDisplay"] == "∞"

    def test_list_table(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Table listing renders the tiers table."""
        result = invoke(cli_runner, config_file, ["tiers", "list"], fmt="table")
        assert result.exit_code == 0
        assert "Pricing Tiers" in result.output

    def test_add_default(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Adding without options appends a default tier and saves."""
        result = invoke(cli_runner, config_file, ["tiers", "add"])

        assert result.exit_code == 0
        assert "Added tier 4" in result.output
        config = load_config(config_file)
        assert len(config.tiers) == 4
        assert config.tiers[-1].unit_price == 5
        assert config.tiers[-1].units == 100

    def test_add_normalizes_values(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Option values are clamped like form input."""
        result = invoke(
            cli_runner,
            config_file,
            ["tiers", "add", "--units", "50", "--free-units", "80", "--price=-3", "--multiplier", "inf"],
        )

        assert result.exit_code == 0
        tier = load_config(config_file).tiers[-1]
        assert tier.free_units == 50
        assert tier.price == 0
        assert tier.is_unlimited

    def test_add_duplicate_sequence(self, cli_runner: CliRunner, config_file: Path) -> None:
        """A taken sequence number is invalid usage."""
        result = invoke(cli_runner, config_file, ["tiers", "add", "--sequence", "2"])
        assert result.exit_code == ExitCode.INVALID_USAGE
        assert not config_file.exists()

    def test_remove(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Removing a tier saves the remaining ones."""
        result = invoke(cli_runner, config_file, ["tiers", "remove", "2"])

        assert result.exit_code == 0
        assert [t.sequence for t in load_config(config_file).tiers] == [1, 3]

    def test_remove_missing(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Unknown indices use the tier-not-found exit code."""
        result = invoke(cli_runner, config_file, ["tiers", "remove", "9"])
        assert result.exit_code == ExitCode.TIER_NOT_FOUND

    def test_remove_last(self, cli_runner: CliRunner, config_file: Path) -> None:
        """The last tier cannot be removed."""
        for _ in range(2):
            assert invoke(cli_runner, config_file, ["tiers", "remove", "1"]).exit_code == 0
        result = invoke(cli_runner, config_file, ["tiers", "remove", "1"])
        assert result.exit_code == ExitCode.INVALID_USAGE
        assert len(load_config(config_file).tiers) == 1

    def test_set_multiplier_infinity(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Setting the first tier unlimited stops the curve inside it."""
        result = invoke(cli_runner, config_file, ["tiers", "set", "1", "multiplier", "infinity"])
        assert result.exit_code == 0
        assert load_config(config_file).tiers[0].is_unlimited

        curve = json.loads(invoke(cli_runner, config_file, ["curve"]).output)
        assert curve["points"][-1]["units"] == 500
        assert curve["points"][-1]["current"] == 10

    def test_set_unit_price(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Hyphenated field names map to tier fields."""
        result = invoke(cli_runner, config_file, ["tiers", "set", "2", "unit-price", "8.5"])
        assert result.exit_code == 0
        assert load_config(config_file).tiers[1].unit_price == 8.5

    def test_set_missing_tier(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Unknown indices use the tier-not-found exit code."""
        result = invoke(cli_runner, config_file, ["tiers", "set", "7", "units", "10"])
        assert result.exit_code == ExitCode.TIER_NOT_FOUND


class TestConfigCommands:
    """Test configuration commands."""

    def test_show_json(self, cli_runner: CliRunner, config_file: Path) -> None:
        """show prints the configuration document."""
        result = invoke(cli_runner, config_file, ["config", "show"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["currency"] == "USD"
        assert len(data["tiers"]) == 3

    def test_show_table(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Table output names the configuration source."""
        result = invoke(cli_runner, config_file, ["config", "show"], fmt="table")
        assert result.exit_code == 0
        assert "CLI flag (--config)" in result.output

    def test_set_mrr(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Setting mrr persists the floor."""
        result = invoke(cli_runner, config_file, ["config", "set", "mrr", "5000"])
        assert result.exit_code == 0
        assert load_config(config_file).mrr == 5000

    def test_set_discount_clamped(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Discounts above 100 are clamped."""
        result = invoke(cli_runner, config_file, ["config", "set", "discount", "150"])
        assert result.exit_code == 0
        assert load_config(config_file).discount == 100

    def test_set_currency(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Supported currencies are stored upper-case."""
        result = invoke(cli_runner, config_file, ["config", "set", "currency", "eur"])
        assert result.exit_code == 0
        assert load_config(config_file).currency == "EUR"

    def test_set_unknown_currency(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Unknown currencies are invalid usage."""
        result = invoke(cli_runner, config_file, ["config", "set", "currency", "XYZ"])
        assert result.exit_code == ExitCode.INVALID_USAGE
        assert not config_file.exists()

    def test_export_yaml_by_suffix(self, cli_runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
        """A .yaml output path exports YAML."""
        output = tmp_path / "export.yaml"
        result = invoke(cli_runner, config_file, ["config", "export", "-o", str(output)])

        assert result.exit_code == 0
        data = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert data["tiers"][2]["multiplier"] == "infinity"

    def test_export_json_stdout(self, cli_runner: CliRunner, config_file: Path) -> None:
        """Export prints the JSON document."""
        result = invoke(cli_runner, config_file, ["config", "export"])
        assert result.exit_code == 0
        assert json.loads(result.output)["tiers"][0]["unitPrice"] == 10

    def test_import(self, cli_runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
        """Importing normalizes and saves a document."""
        source = tmp_path / "incoming.json"
        source.write_text(json.dumps({"currency": "XYZ", "mrr": 10, "tiers": [{"units": 20, "unitPrice": 2}]}))
        result = invoke(cli_runner, config_file, ["config", "import", str(source)])

        assert result.exit_code == 0
        config = load_config(config_file)
        assert config.currency == "USD"
        assert config.mrr == 10
        assert len(config.tiers) == 1

    def test_import_missing(self, cli_runner: CliRunner, config_file: Path, tmp_path: Path) -> None:
        """Missing import files map to the config source exit code."""
        result = invoke(cli_runner, config_file, ["config", "import", str(tmp_path / "nope.json")])
        assert result.exit_code == ExitCode.CONFIG_SOURCE_ERROR

    def test_paths(self, cli_runner: CliRunner, config_file: Path) -> None:
        """paths reports the active file and its source."""
        result = invoke(cli_runner, config_file, ["config", "paths"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["config"]["active"]["value"] == str(config_file)
        assert data["config"]["active"]["source"] == "CLI flag (--config)"
        assert data["resolution_order"][0] == "--config flag"

    def test_paths_lists_environment(
        self, cli_runner: CliRunner, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """paths reports TPV_* variables, unset ones included."""
        monkeypatch.setenv(ENV_CURRENCY, "EUR")
        result = invoke(cli_runner, config_file, ["config", "paths"])

        assert result.exit_code == 0
        data = json.loads(result.output)["config"]
        assert data[ENV_CURRENCY]["value"] == "EUR"
        assert data[ENV_CONFIG_PATH]["value"] is None

    def test_env_config_path(self, cli_runner: CliRunner, config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """TPV_CONFIG_PATH is used for loading and saving."""
        monkeypatch.setenv(ENV_CONFIG_PATH, str(config_file))
        result = cli_runner.invoke(app, ["--format", "json", "config", "set", "mrr", "42"])
        assert result.exit_code == 0
        assert load_config(config_file).mrr == 42

        result = cli_runner.invoke(app, ["--format", "json", "config", "paths"])
        assert json.loads(result.output)["config"]["active"]["source"] == "Environment variable (TPV_CONFIG_PATH)"


class TestCurrenciesCommand:
    """Test the currencies command."""

    def test_list(self, cli_runner: CliRunner, config_file: Path) -> None:
        """All currencies are listed with the active one."""
        result = invoke(cli_runner, config_file, ["currencies"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["count"] == 13
        assert data["current"] == "USD"

    def test_env_currency_override(
        self, cli_runner: CliRunner, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """TPV_CURRENCY overrides the stored currency."""
        monkeypatch.setenv(ENV_CURRENCY, "gbp")
        result = invoke(cli_runner, config_file, ["currencies"])
        assert json.loads(result.output)["current"] == "GBP"

    def test_csv_unsupported(self, cli_runner: CliRunner, config_file: Path) -> None:
        """CSV is not offered for currencies."""
        result = invoke(cli_runner, config_file, ["currencies"], fmt="csv")
        assert result.exit_code == ExitCode.INVALID_USAGE
