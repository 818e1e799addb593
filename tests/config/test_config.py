"""Tests for benchmark configuration."""

import pytest
from pydantic import ValidationError

from crossbench.configs import BenchmarkConfig, create_config
from crossbench.configs.default import BackendConfig
from crossbench.utils.config import apply_overrides, load_config, save_config


class TestBenchmarkConfig:
    """Tests for the configuration schema."""

    def test_defaults(self):
        config = BenchmarkConfig()

        assert config.sizes == (64, 128, 256, 512)
        assert config.seed is None
        assert config.backend.name == "jax"
        assert config.general.transpose == "auto"
        assert config.codec.max_dimension == 4096

    def test_empty_sizes_rejected(self):
        with pytest.raises(ValidationError, match="At least one matrix size"):
            BenchmarkConfig(sizes=())

    def test_non_positive_size_rejected(self):
        with pytest.raises(ValidationError):
            BenchmarkConfig(sizes=(64, 0))

    def test_size_above_codec_limit_rejected(self):
        with pytest.raises(ValidationError, match="exceed codec.max_dimension"):
            BenchmarkConfig(sizes=(64, 8192))

    def test_invalid_transpose_mode(self):
        with pytest.raises(ValidationError):
            BenchmarkConfig(general={"transpose": "sometimes"})

    def test_threads_backend_warns_on_large_sizes(self):
        with pytest.warns(UserWarning, match="threads backend"):
            BenchmarkConfig(sizes=(4096,), backend={"name": "threads"})

    def test_backend_factory_kwargs(self):
        assert BackendConfig(name="jax", platform="cpu").factory_kwargs() == {"platform": "cpu"}
        assert BackendConfig(name="threads", max_workers=2).factory_kwargs() == {"max_workers": 2}
        assert BackendConfig(name="custom").factory_kwargs() == {}

    @pytest.mark.parametrize("seed", [-1, 2**32])
    def test_seed_outside_key_range_rejected(self, seed):
        with pytest.raises(ValidationError):
            BenchmarkConfig(seed=seed)


class TestCreateConfig:
    """Tests for create_config."""

    def test_basic(self):
        config = create_config(sizes=[32, 64], backend="threads", seed=3)

        assert config.sizes == (32, 64)
        assert config.backend.name == "threads"
        assert config.seed == 3

    def test_dotted_overrides(self):
        config = create_config(**{"general.transpose": False, "codec.max_dimension": 1024})

        assert config.general.transpose is False
        assert config.codec.max_dimension == 1024

    def test_nested_dict_overrides(self):
        config = create_config(backend="jax", **{"general": {"transpose_min_size": 64}})
        assert config.general.transpose_min_size == 64


class TestConfigFiles:
    """Tests for YAML load/save."""

    def test_save_and_load(self, tmp_path):
        config = create_config(sizes=[16, 32], backend="threads", seed=7, **{"backend.max_workers": 2})

        path = save_config(config, tmp_path / "configs" / "sweep.yaml")
        loaded = load_config(path, BenchmarkConfig)

        assert loaded == config

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "sweep.yaml"
        path.write_text("sizes: [8, 16]\nbackend:\n  name: threads\n")

        config = load_config(path, BenchmarkConfig)

        assert config.sizes == (8, 16)
        assert config.backend.name == "threads"
        assert config.codec.max_dimension == 4096

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_config(path, BenchmarkConfig) == BenchmarkConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml", BenchmarkConfig)

    def test_overrides_take_precedence_over_file(self, tmp_path):
        path = tmp_path / "sweep.yaml"
        path.write_text("sizes: [8, 16]\nseed: 1\nbackend:\n  name: threads\n  max_workers: 2\n")

        config = load_config(path, BenchmarkConfig, {"seed": 5, "backend.name": "jax"})

        assert config.sizes == (8, 16)
        assert config.seed == 5
        assert config.backend.name == "jax"
        assert config.backend.max_workers == 2

    def test_overrides_validated_against_file(self, tmp_path):
        """An override is checked together with the limits set in the file."""
        path = tmp_path / "sweep.yaml"
        path.write_text("sizes: [8]\ncodec:\n  max_dimension: 16\n")

        with pytest.raises(ValidationError, match="exceed codec.max_dimension"):
            load_config(path, BenchmarkConfig, {"sizes": (32,)})

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "sweep.yaml"
        path.write_text("- 64\n- 128\n")

        with pytest.raises(ValueError, match="must hold a mapping"):
            load_config(path, BenchmarkConfig)


class TestApplyOverrides:
    """Tests for apply_overrides."""

    def test_dotted_keys_create_sections(self):
        assert apply_overrides({}, {"backend.name": "threads"}) == {"backend": {"name": "threads"}}

    def test_nested_dicts_merge(self):
        config_dict = {"backend": {"name": "jax", "platform": "cpu"}}

        apply_overrides(config_dict, {"backend": {"platform": "gpu"}})

        assert config_dict == {"backend": {"name": "jax", "platform": "gpu"}}

    def test_plain_keys_replace(self):
        assert apply_overrides({"sizes": (64,)}, {"sizes": (8, 16)}) == {"sizes": (8, 16)}
