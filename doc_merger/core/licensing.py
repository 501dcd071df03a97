"""
Credential handling and activation of a merge context.

Activation is an explicit step: it validates the supplied credentials and
returns a ``MergeContext`` that the pipeline carries around. Nothing is
registered globally.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from .config import Config
from .errors import ConfigurationError, LicenseError
from ..utils.logging_config import get_module_logger, mask_secret

MODE_METERED = "metered"
MODE_LICENSE = "license"

logger = get_module_logger(__name__)


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


@dataclass(frozen=True)
class Credentials:
    """Raw credentials as supplied on the command line or in the environment."""

    license_key: str = ""
    customer_name: str = ""
    api_key: str = ""

    @classmethod
    def from_sources(cls, license_key: Optional[str] = None,
                     customer_name: Optional[str] = None,
                     api_key: Optional[str] = None,
                     environ: Optional[Mapping[str, str]] = None) -> "Credentials":
        """
        Build credentials from explicit values, falling back to the environment.

        Explicit (flag) values win over environment variables.
        """
        environ = environ or {}
        return cls(
            license_key=_clean(license_key) or _clean(environ.get(Config.ENV_LICENSE_KEY)),
            customer_name=_clean(customer_name) or _clean(environ.get(Config.ENV_CUSTOMER_NAME)),
            api_key=_clean(api_key) or _clean(environ.get(Config.ENV_API_KEY)),
        )

    def __repr__(self) -> str:
        return (f"Credentials(license_key={mask_secret(self.license_key)!r}, "
                f"customer_name={self.customer_name!r}, "
                f"api_key={mask_secret(self.api_key)!r})")


@dataclass(frozen=True)
class MergeContext:
    """Activated settings shared by every pipeline stage."""

    credentials: Credentials
    mode: str
    render_engine: str = Config.DOCX_RENDER_ENGINE

    @property
    def licensee(self) -> str:
        if self.mode == MODE_LICENSE:
            return self.credentials.customer_name
        return "metered"


def activate(credentials: Credentials, render_engine: Optional[str] = None) -> MergeContext:
    """
    Validate credentials and return an activated context.

    An API key selects metered mode. Otherwise a license key is required
    together with a customer name.

    Raises:
        ConfigurationError: If the render engine is unknown
        LicenseError: If the credential combination is missing or invalid
    """
    engine = render_engine or Config.DOCX_RENDER_ENGINE
    if engine not in Config.RENDER_ENGINES:
        raise ConfigurationError(f"unknown render engine: {engine}")

    if credentials.api_key:
        logger.debug("Activating metered mode with key %s", mask_secret(credentials.api_key))
        return MergeContext(credentials=credentials, mode=MODE_METERED, render_engine=engine)

    if credentials.license_key:
        if not credentials.customer_name:
            raise LicenseError("customer name required for license key")
        logger.debug("Activating license mode for '%s' with key %s",
                     credentials.customer_name, mask_secret(credentials.license_key))
        return MergeContext(credentials=credentials, mode=MODE_LICENSE, render_engine=engine)

    raise LicenseError("neither api or license key provided")
