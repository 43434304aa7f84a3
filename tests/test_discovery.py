"""Tests for test discovery."""

import pytest

import samples
from unittask.config import TestsConfig
from unittask.core.discovery import TestDiscovery
from unittask.framework import Outcome, TestFramework


class TestTestDiscovery:
    """Tests for TestDiscovery."""

    def test_registers_discovered_cases(self, tmp_path):
        """Test discovered cases are registered with the framework."""
        module = samples.write_test_module(tmp_path / "tests")
        framework = TestFramework()
        discovery = TestDiscovery(TestsConfig(), tmp_path, framework)

        cases = discovery()

        assert [case.description for case in cases] == [
            f"{module}.Calc.test_add",
            f"{module}.Calc.test_broken_sum",
        ]
        assert framework.test_cases == cases

    def test_discovered_cases_run(self, tmp_path):
        """Test discovered cases run through the framework."""
        samples.write_test_module(tmp_path / "tests")
        framework = TestFramework(samples.RecordingConfiguration())
        TestDiscovery(TestsConfig(), tmp_path, framework)()

        framework.run_tests()

        assert [case.result for case in framework.test_cases] == [Outcome.PASS, Outcome.FAIL]

    def test_pattern_respected(self, tmp_path):
        """Test only modules matching the pattern are loaded."""
        samples.write_test_module(tmp_path / "tests")
        discovery = TestDiscovery(TestsConfig(pattern="check_*.py"), tmp_path, TestFramework())

        assert discovery() == []

    def test_missing_directory(self, tmp_path):
        """Test a missing start directory raises."""
        discovery = TestDiscovery(TestsConfig(start_directory="nope"), tmp_path, TestFramework())

        with pytest.raises(FileNotFoundError):
            discovery()

    def test_configure(self, tmp_path):
        """Test discovery can be repointed after construction."""
        discovery = TestDiscovery(framework=TestFramework())
        discovery.configure(TestsConfig(start_directory="suite"), tmp_path)

        assert discovery.start_directory == (tmp_path / "suite").resolve()
        assert discovery.top_level_directory is None

    def test_top_level_directory(self, tmp_path):
        """Test the top-level directory is resolved against the base directory."""
        discovery = TestDiscovery(
            TestsConfig(top_level_directory="."), tmp_path, TestFramework()
        )

        assert discovery.top_level_directory == tmp_path.resolve()
