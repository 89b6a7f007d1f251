from pydantic import __version__ as _pydantic_version

# Config models rely on the Pydantic v2 API (ConfigDict, Field aliases).
if not _pydantic_version.startswith("2"):
    raise ImportError(
        "querywarnings requires pydantic>=2.0; detected version %s" % _pydantic_version
    )

from .collector import (
    NOOP_WARNING_COLLECTOR,
    DefaultWarningCollector,
    DefaultWarningCollectorFactory,
    NoOpWarningCollector,
    WarningCollector,
    WarningCollectorFactory,
)
from .config import (
    CollectorSettings,
    TestingWarningCollectorConfig,
    WarningCollectorConfig,
    load_settings,
)
from .errors import (
    InvalidArgument,
    InvalidConfiguration,
    NullConfiguration,
    WarningCollectorError,
)
from .models import QueryWarning, WarningCode
from .testing import (
    TestingWarningCollector,
    TestingWarningCollectorFactory,
    create_test_warning,
)

__all__ = [
    # protocols
    "WarningCollector",
    "WarningCollectorFactory",
    # collectors
    "NoOpWarningCollector",
    "NOOP_WARNING_COLLECTOR",
    "DefaultWarningCollector",
    "DefaultWarningCollectorFactory",
    "TestingWarningCollector",
    "TestingWarningCollectorFactory",
    "create_test_warning",
    # models
    "QueryWarning",
    "WarningCode",
    # config
    "WarningCollectorConfig",
    "TestingWarningCollectorConfig",
    "CollectorSettings",
    "load_settings",
    # errors
    "WarningCollectorError",
    "NullConfiguration",
    "InvalidConfiguration",
    "InvalidArgument",
]
