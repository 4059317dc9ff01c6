"""
Configuration settings for the QHSE risk engine.
Load configuration from environment variables or a .env file.
"""
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from qhse_risk.config.thresholds import IssueThresholds
from qhse_risk.schemas.enums import Severity

# Load environment variables from .env file
env_file = Path(__file__).parent.parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

THRESHOLD_ENV_PREFIX = 'QHSE_THRESHOLD_'


class ConfigurationError(ValueError):
    """Raised when an environment setting cannot be interpreted."""

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(message)
        self.setting = setting


class Settings:
    """Application settings loaded from environment variables."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('QHSE_LOG_DIR', '')

    # ============================================================================
    # Dashboard aggregation
    # ============================================================================
    SEVERITY_FLOOR = os.getenv('QHSE_SEVERITY_FLOOR', Severity.CRITICAL.value)

    @classmethod
    def threshold_overrides(cls) -> Dict[str, str]:
        """
        Collect QHSE_THRESHOLD_<NAME> variables from the environment.

        Returns:
            Mapping of IssueThresholds field name to raw string value
        """
        overrides = {}
        for field_name in IssueThresholds.model_fields:
            raw = os.getenv(f'{THRESHOLD_ENV_PREFIX}{field_name.upper()}')
            if raw is not None and raw.strip() != '':
                overrides[field_name] = raw.strip()
        return overrides

    @classmethod
    def load_issue_thresholds(cls) -> IssueThresholds:
        """
        Build issue thresholds from defaults plus environment overrides.

        Raises:
            ConfigurationError: If an override is not a number
        """
        values = {}
        for field_name, raw in cls.threshold_overrides().items():
            try:
                values[field_name] = float(raw)
            except ValueError:
                env_name = f'{THRESHOLD_ENV_PREFIX}{field_name.upper()}'
                raise ConfigurationError(
                    f'{env_name} must be numeric, got {raw!r}',
                    setting=env_name,
                ) from None
        return IssueThresholds(**values)

    @classmethod
    def severity_floor(cls) -> Severity:
        """
        Resolve the configured severity floor for issue counts.

        Accepts the value or the member name, case-insensitively
        ('Critical', 'HIGH', 'medium').

        Raises:
            ConfigurationError: If the value names no severity
        """
        raw = str(cls.SEVERITY_FLOOR).strip()
        for severity in Severity:
            if raw.lower() in (severity.value.lower(), severity.name.lower()):
                return severity
        valid = ', '.join(s.value for s in Severity)
        raise ConfigurationError(
            f'QHSE_SEVERITY_FLOOR must be one of {valid}, got {raw!r}',
            setting='QHSE_SEVERITY_FLOOR',
        )

    @classmethod
    def validate_required_settings(cls) -> List[str]:
        """
        Validate that all settings can be interpreted.
        Returns list of problems (empty if valid).
        """
        problems = []

        for check in (cls.load_issue_thresholds, cls.severity_floor):
            try:
                check()
            except ConfigurationError as e:
                problems.append(str(e))

        if cls.LOG_DIR and Path(cls.LOG_DIR).exists() and not Path(cls.LOG_DIR).is_dir():
            problems.append(f'QHSE_LOG_DIR is not a directory: {cls.LOG_DIR}')

        return problems


# Create settings instance
settings = Settings()
