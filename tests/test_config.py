# tests/test_config.py
import pytest

from tableausim import ConfigParsingError, SolverConfig, load_solver_config


class TestSolverConfig:

    def test_defaults(self):
        config = SolverConfig()
        assert config.pivot_tolerance == 1e-12
        assert config.log_level == "INFO"
        assert config.validate_topology is True

    def test_from_mapping_fills_defaults_and_normalizes_level(self):
        config = SolverConfig.from_mapping({"log_level": "debug"})
        assert config.log_level == "DEBUG"
        assert config.pivot_tolerance == 1e-12

    @pytest.mark.parametrize("raw", [
        {"pivot_tolerance": -1.0},
        {"pivot_tolerance": "small"},
        {"log_level": "LOUD"},
        {"validate_topology": "yes"},
        {"unknown_key": 1},
    ])
    def test_schema_violations(self, raw):
        with pytest.raises(ConfigParsingError):
            SolverConfig.from_mapping(raw)


class TestLoadSolverConfig:

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "solver.yaml"
        path.write_text("pivot_tolerance: 1.0e-9\nvalidate_topology: false\n", encoding="utf-8")
        config = load_solver_config(path)
        assert config.pivot_tolerance == pytest.approx(1e-9)
        assert config.validate_topology is False
        assert config.log_level == "INFO"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_solver_config(path) == SolverConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigParsingError):
            load_solver_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("pivot_tolerance: [1e-9\n", encoding="utf-8")
        with pytest.raises(ConfigParsingError) as exc_info:
            load_solver_config(path)
        assert "Invalid YAML" in exc_info.value.details

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigParsingError) as exc_info:
            load_solver_config(path)
        assert "Solver Configuration Error" in exc_info.value.get_diagnostic_report()
