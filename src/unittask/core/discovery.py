"""Test discovery functionality."""

import logging
import unittest
from pathlib import Path
from typing import Optional

from unittask.config import TestsConfig
from unittask.framework import get_default_framework
from unittask.framework.models import TestCase
from unittask.framework.runner import TestFramework

log = logging.getLogger(__name__)


class TestDiscovery:
    """Registers the unittest cases found under a project's test directory.

    Instances are no-argument registration routines, so they can be handed to
    ``create_unit_test_task`` directly.
    """

    __test__ = False

    def __init__(
        self,
        config: Optional[TestsConfig] = None,
        base_dir: Path | str | None = None,
        framework: Optional[TestFramework] = None,
    ):
        """Initialize test discovery."""
        self.config = config or TestsConfig()
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.framework = framework

    def configure(self, config: TestsConfig, base_dir: Path | str) -> None:
        """Point discovery at another project."""
        self.config = config
        self.base_dir = Path(base_dir)

    @property
    def start_directory(self) -> Path:
        return self.config.get_absolute_paths(self.base_dir)["start_directory"]

    @property
    def top_level_directory(self) -> Optional[Path]:
        return self.config.get_absolute_paths(self.base_dir).get("top_level_directory")

    def discover(self) -> unittest.TestSuite:
        """Load every test module matching the configured pattern."""
        if not self.start_directory.is_dir():
            raise FileNotFoundError(f"Test directory not found: {self.start_directory}")

        top_level = self.top_level_directory
        loader = unittest.TestLoader()
        suite = loader.discover(
            str(self.start_directory),
            pattern=self.config.pattern,
            top_level_dir=str(top_level) if top_level else None,
        )
        for error in loader.errors:
            log.debug("Discovery error: %s", error)
        return suite

    def __call__(self) -> list[TestCase]:
        framework = self.framework or get_default_framework()
        cases = framework.add_tests(self.discover())
        log.debug("Registered %d test cases from %s", len(cases), self.start_directory)
        return cases
