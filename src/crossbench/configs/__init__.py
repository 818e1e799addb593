from .builder import create_config
from .default import BackendConfig, BenchmarkConfig, CodecConfig, GeneralConfig

__all__ = ["create_config", "BackendConfig", "BenchmarkConfig", "CodecConfig", "GeneralConfig"]
