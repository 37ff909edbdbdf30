"""
Centralized settings and path configuration for the fee tool.
"""
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Regression baseline and report output
    golden_cases: Path
    report_output: Path

    # Fee schedule the static tables implement
    schedule_name: str = "US 2026"

    # Defaults for any CommercialContext field the caller leaves out
    default_category: str = "standard"
    default_price: float = 20.0
    default_placement_mode: str = "optimized"
    default_storage_season: str = "non_peak"
    default_inventory_age_days: int = 0

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure."""
        root = project_root or get_project_root()

        return cls(
            project_root=root,
            golden_cases=root / 'tests' / 'golden_cases.csv',
            report_output=root / 'outputs' / 'fee_report.csv',
        )

    def default_context(self):
        """Build the CommercialContext used when a caller passes none."""
        from ..engine.models import Category, CommercialContext, PlacementMode, StorageSeason

        return CommercialContext(
            category=Category(self.default_category),
            price=float(self.default_price),
            inventory_age_days=int(self.default_inventory_age_days),
            placement_mode=PlacementMode(self.default_placement_mode),
            storage_season=StorageSeason(self.default_storage_season),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
