"""Construction-time security checks.

The client holds an API token that can upload to (and bill against) a
Cloudflare account, so it refuses to start in two situations:

* the interpreter looks like it is running inside a web browser (Pyodide,
  PyScript and similar WebAssembly hosts), where the token would be shipped
  to every visitor;
* the token or account ID is missing.

Browser detection is a capability probe and nothing more.  A host can shim
or hide the globals it looks at, so treat it as a guard against accidents,
not as a security boundary.  The probe is configurable through
:attr:`SecurityConfig.environment_probe
<cfimages.config.SecurityConfig.environment_probe>`.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from cfimages.errors import ConfigurationSecurityError

if TYPE_CHECKING:
    from cfimages.config import CFImagesConfig


def is_running_in_browser() -> bool:
    """Return ``True`` if the interpreter appears to run in a browser host.

    Checks for the Emscripten platform tag used by Pyodide, and for an
    already-imported ``js`` bridge module exposing a ``window`` global.
    The ``js`` module is never imported here.
    """
    if sys.platform == "emscripten":
        return True
    js = sys.modules.get("js")
    return js is not None and hasattr(js, "window")


def validate_configuration(config: CFImagesConfig) -> None:
    """Validate *config* before any service is created.

    Raises
    ------
    ConfigurationSecurityError
        If browser usage is prevented and the environment probe reports a
        browser-like host, or if ``token`` / ``account_id`` is empty.
    """
    security = config.security

    if security.prevent_browser_usage and security.environment_probe():
        raise ConfigurationSecurityError(
            "CFImages client detected in a browser environment. "
            "For security reasons, this library should only be used in "
            "server-side code.",
            context={"reason": "browser_environment"},
        )

    if not config.token or not config.account_id:
        raise ConfigurationSecurityError(
            "Both token and account_id are required. "
            "These should be read from secure environment variables, "
            "not hardcoded.",
            context={"reason": "missing_credentials"},
        )
