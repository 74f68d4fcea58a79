import tempfile
import textwrap
import unittest
from pathlib import Path

from pydantic import ValidationError

from dspfilters.core.config import (
    DSPConfig,
    ExponentialConfig,
    MedianConfig,
    WaveletConfig,
    load_config,
)
from dspfilters.core.types import Environment, ThresholdMode
from dspfilters.filters.exponential import ExponentialSmoothingSettings
from dspfilters.filters.wavelet import WaveletSettings

REPO_CONFIGS = Path(__file__).resolve().parent.parent / "configs"


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_dir = Path(self._tmp.name)
        (self.config_dir / "base.yaml").write_text(textwrap.dedent("""
            logging:
              level: INFO
              format: console
            replay:
              buffer_size: 128
            chain:
              filters: []
        """))
        (self.config_dir / "custom.yaml").write_text(textwrap.dedent("""
            replay:
              buffer_size: 32
            chain:
              filters:
                - kind: median
                  window_size: 9
                - kind: wavelet
                  threshold_mode: soft
                  depth: 2
        """))

    def tearDown(self):
        self._tmp.cleanup()

    def test_named_file_merges_over_base(self):
        config = load_config("custom", config_dir=self.config_dir)

        self.assertIsInstance(config, DSPConfig)
        self.assertEqual(config.replay.buffer_size, 32)
        self.assertEqual(config.replay.header, "$GYRACC")
        self.assertEqual(config.logging.level, "INFO")

        median, wavelet = config.chain.filters
        self.assertIsInstance(median, MedianConfig)
        self.assertEqual(median.window_size, 9)
        self.assertIsInstance(wavelet, WaveletConfig)
        self.assertEqual(wavelet.threshold_mode, ThresholdMode.SOFT)

    def test_overrides_win(self):
        config = load_config(
            "custom",
            config_dir=self.config_dir,
            overrides={"logging": {"level": "DEBUG", "format": "json"}},
        )

        self.assertEqual(config.logging.level, "DEBUG")
        self.assertEqual(config.logging.format, "json")

    def test_base_only(self):
        config = load_config("base", config_dir=self.config_dir)

        self.assertEqual(config.chain.filters, [])

    def test_missing_named_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("nope", config_dir=self.config_dir)

    def test_invalid_values_rejected(self):
        (self.config_dir / "bad.yaml").write_text("replay:\n  buffer_size: 0\n")

        with self.assertRaises(ValidationError):
            load_config("bad", config_dir=self.config_dir)

    def test_repository_configs_validate(self):
        for name in ("base", "imu", "smoothing", "wavelet"):
            with self.subTest(config=name):
                self.assertIsInstance(load_config(name, config_dir=REPO_CONFIGS), DSPConfig)

        imu = load_config("imu", config_dir=REPO_CONFIGS)
        self.assertEqual(imu.chain.filters[0].kind, "median")
        self.assertEqual(imu.chain.filters[0].window_size, 16)


class TestSettingsFromConfig(unittest.TestCase):
    def test_exponential(self):
        settings = ExponentialSmoothingSettings.from_config(
            ExponentialConfig(environment="undefined", delta_threshold=2.0)
        )

        self.assertEqual(settings.environment, Environment.UNDEFINED)
        self.assertEqual(settings.delta_threshold, 2.0)

    def test_wavelet_round_trips_through_dict(self):
        settings = WaveletSettings.from_config(WaveletConfig(threshold_value=0.5, depth=3))

        self.assertEqual(WaveletConfig(**settings.to_dict()).depth, 3)
        self.assertEqual(settings.to_dict()["threshold_mode"], "hard")


if __name__ == "__main__":
    unittest.main()
