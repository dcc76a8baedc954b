"""Environment preparation for Gemini CLI subprocesses.

Builds the variable set a subprocess runs with: the host environment minus
IDE-integration variables and the API key (so the CLI uses its OAuth login by
default), plus caller overrides. Also produces a masked copy for logging.
"""

import os
from collections.abc import Mapping

from mcp_gemini_cli.core.config import WORKING_DIR_ENV_VAR

IDE_INTEGRATION_ENV_VARS: tuple[str, ...] = (
    "GEMINI_CLI_IDE_SERVER_PORT",
    "GEMINI_CLI_IDE_WORKSPACE_PATH",
    "ENABLE_IDE_INTEGRATION",
)

API_KEY_ENV_VAR = "GEMINI_API_KEY"

MASKED_VALUE = "[MASKED]"


def prepare_env(
    custom: Mapping[str, str | None] | None = None,
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build the complete environment for a subprocess invocation.

    Deny-listed variables are removed before custom overrides are applied, so
    a caller can still set one of them explicitly.

    Args:
        custom: Overrides to apply. A value of None unsets the variable.
        base: Starting environment (default: os.environ)

    Returns:
        A fresh dict; neither ``base`` nor ``custom`` is modified.
    """
    env = dict(os.environ if base is None else base)

    for name in IDE_INTEGRATION_ENV_VARS:
        env.pop(name, None)
    env.pop(API_KEY_ENV_VAR, None)

    if custom:
        for name, value in custom.items():
            if value is None:
                env.pop(name, None)
            else:
                env[name] = value

    return env


def mask_sensitive_data(env: Mapping[str, str]) -> Mapping[str, str]:
    """Return a version of ``env`` that is safe to log.

    When no sensitive variable is present the same object is returned.
    Otherwise a shallow copy with the secret replaced by MASKED_VALUE is
    returned. The input is never mutated.
    """
    if API_KEY_ENV_VAR not in env:
        return env
    masked = dict(env)
    masked[API_KEY_ENV_VAR] = MASKED_VALUE
    return masked


def env_from_tool_args(api_key: str | None = None) -> dict[str, str]:
    """Build environment overrides from request parameters.

    A caller-supplied API key takes priority over anything in the host
    environment.
    """
    env_vars: dict[str, str] = {}
    if api_key:
        env_vars[API_KEY_ENV_VAR] = api_key
    return env_vars


def resolve_working_directory(
    requested: str | None = None,
    env_default: str | None = None,
) -> str:
    """Resolve the directory a subprocess runs in.

    Fallback chain: requested, env_default, $GEMINI_CLI_WORKING_DIR, then the
    process current directory. The first non-empty value wins.
    """
    if requested:
        return requested
    if env_default:
        return env_default
    from_env = os.environ.get(WORKING_DIR_ENV_VAR)
    if from_env:
        return from_env
    return os.getcwd()
