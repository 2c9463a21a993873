"""
CLI Phase 2: Prepare execution environment.

Validates the target and config file, loads the formatter settings and
builds the provider, gateway and walker. Nothing is formatted yet.
"""

from __future__ import annotations

from typing import Any, Dict

from . import __version__
from .cli_config import ExecutionPlan, UserConfig
from .errors import PathNotFoundError, TransformError
from .gateway import TransformGateway
from .logging_utils import LOG, VERBOSITY_VERBOSE
from .providers import CommandProvider, EclipseProvider, TransformProvider, get_provider
from .settings_loader import load_settings
from .shared import extension_predicate
from .walker import BatchWalker


def _log_transform_error(error: TransformError) -> None:
    LOG.warning("Formatting error: %s", error)


def _provider_kwargs(config: UserConfig) -> Dict[str, Any]:
    if config.provider == EclipseProvider.NAME:
        return {"executable": config.eclipse, "timeout": config.timeout}
    if config.provider == CommandProvider.NAME:
        return {"command": config.formatter_command, "timeout": config.timeout}
    return {}


def build_provider(config: UserConfig) -> TransformProvider:
    """Instantiate the requested provider and check it can run."""
    provider = get_provider(config.provider, **_provider_kwargs(config))
    provider.check_available()
    return provider


def prepare_execution_environment(config: UserConfig) -> ExecutionPlan:
    """
    Phase 2: Validate inputs and prepare execution environment.

    - Validates the target and config file exist
    - Loads the formatter settings
    - Builds provider, gateway and walker

    Raises:
        PathNotFoundError: If the target, config or formatter executable is missing
        ConfigParseError: If the config file is malformed
        UnknownProviderError: If no provider is registered under config.provider
    """
    LOG.debug("Eclipse Formatter CLI v%s", __version__)
    LOG.debug("Target: %s", config.target.absolute())
    LOG.debug("Config: %s", config.config_file.absolute())
    LOG.debug("Dry run: %s", config.dry_run)
    LOG.debug("Recursive: %s", config.recursive)

    if not config.target.exists():
        raise PathNotFoundError(f"Target does not exist: {config.target.absolute()}")

    if not config.config_file.exists():
        raise PathNotFoundError(
            f"Config file not found: {config.config_file.absolute()}. "
            "Please create an Eclipse formatter configuration file or specify one with -c"
        )

    settings = load_settings(config.config_file)
    provider = build_provider(config)
    LOG.debug("Provider: %s", provider.NAME)

    gateway = TransformGateway(
        provider,
        settings,
        diagnostics=_log_transform_error if config.verbosity >= VERBOSITY_VERBOSE else None,
    )
    walker = BatchWalker(gateway, extension_predicate(config.extension))

    return ExecutionPlan(config=config, settings=settings, gateway=gateway, walker=walker)
