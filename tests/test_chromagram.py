"""Tests for chromagram construction.

Most tests use a spectrum with one bin per Hz (bin count equal to sample
rate), so the center bin of a frequency is simply the rounded frequency.
With the default reference (C3 = 130.81 Hz) the first-octave centers are:

    C 131, C# 139, D 147, D# 156, E 165, F 175,
    F# 185, G 196, G# 208, A 220, A# 233, B 247
"""

import warnings

import numpy as np
import pytest

from chromachord.analysis import (
    Chromagram,
    ChromagramConfig,
    ChromagramFactory,
    Magnitude,
    pitch_frequency,
)
from chromachord.core import (
    DEFAULT_REF_FREQ,
    ConfigurationError,
    InvalidInputError,
    UnknownPitchClassError,
)
from chromachord.input import AudioLoader
from chromachord.theory import Tone, TwelveTone


def one_hz_bins(n_bins: int = 4096, spikes: dict = None) -> Magnitude:
    """Magnitude with 1 Hz bins and optional {bin: value} spikes."""
    values = np.zeros(n_bins)
    for index, value in (spikes or {}).items():
        values[index] = value
    return Magnitude(values, float(n_bins))


class EmptyChroma:
    """A chroma with no pitch classes."""

    def __iter__(self):
        return iter(())

    def size(self):
        return 12

    def step(self, pitch_class):
        raise KeyError(pitch_class)


class RepeatingChroma(TwelveTone):
    """A broken chroma that enumerates C twice."""

    def __iter__(self):
        return iter([Tone.C, Tone.D, Tone.C])


class TestChromagramConfig:
    """Tests for factory configuration."""

    def test_default_configuration(self):
        factory = ChromagramFactory.default()
        assert factory.config == ChromagramConfig(
            num_octaves=2, num_harmonics=2, bin_radius=2, ref_freq=DEFAULT_REF_FREQ
        )
        assert factory.config.ref_freq == pytest.approx(130.81, abs=0.01)

    def test_keyword_arguments(self):
        factory = ChromagramFactory(num_octaves=3, num_harmonics=4, bin_radius=1, ref_freq=65.4)
        assert factory.config.num_octaves == 3
        assert factory.config.num_harmonics == 4
        assert factory.config.bin_radius == 1
        assert factory.config.ref_freq == 65.4

    def test_config_overrides_arguments(self):
        config = ChromagramConfig(num_octaves=1)
        factory = ChromagramFactory(num_octaves=5, config=config)
        assert factory.config.num_octaves == 1

    def test_config_is_immutable(self):
        config = ChromagramConfig()
        with pytest.raises(Exception):
            config.num_octaves = 3

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"num_octaves": 0},
            {"num_harmonics": 0},
            {"bin_radius": -1},
            {"ref_freq": 0.0},
            {"ref_freq": -130.0},
            {"ref_freq": float("nan")},
            {"num_octaves": 2.0},
            {"num_harmonics": 1.5},
            {"bin_radius": 1.5},
            {"bin_radius": True},
            {"num_octaves": "2"},
        ],
    )
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ConfigurationError):
            ChromagramFactory(**kwargs)

    def test_fractional_radius_rejected_before_aggregation(self):
        with pytest.raises(ConfigurationError, match="bin_radius must be an integer"):
            ChromagramFactory(bin_radius=1.5).create(
                Magnitude(np.ones(4096), 4096.0), TwelveTone()
            )

    def test_numpy_integer_parameters_accepted(self):
        factory = ChromagramFactory(num_octaves=np.int64(1), bin_radius=np.int64(0))
        chromagram = factory.create(one_hz_bins(spikes={165: 1.0}), TwelveTone())
        assert chromagram.energy(Tone.E) == pytest.approx(1.0)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            ChromagramConfig(num_octaves=0)


class TestPitchFrequency:
    """Tests for pitch-class frequency calculation."""

    def test_reference_tone(self):
        assert pitch_frequency(TwelveTone(), Tone.C, 130.81279) == pytest.approx(130.81279)

    def test_equal_temperament(self):
        assert pitch_frequency(TwelveTone(), Tone.A, 130.81279) == pytest.approx(220.0, abs=0.01)
        assert pitch_frequency(TwelveTone(), Tone.Fs, 100.0) == pytest.approx(100.0 * 2 ** 0.5)


class TestChromagramFactory:
    """Tests for the octave/harmonic aggregation."""

    def test_single_spike_lands_on_its_pitch_class(self):
        chromagram = ChromagramFactory.default().create(one_hz_bins(spikes={165: 1.0}), TwelveTone())

        assert chromagram.energy(Tone.E) == pytest.approx(1.0)
        for tone in Tone:
            if tone != Tone.E:
                assert chromagram.energy(tone) == 0.0

    def test_harmonic_energy_is_attenuated(self):
        # 330 Hz is E at octave 2 (full weight) and harmonic 2 of octave 1 (half weight)
        chromagram = ChromagramFactory.default().create(one_hz_bins(spikes={330: 1.0}), TwelveTone())
        assert chromagram.energy(Tone.E) == pytest.approx(1.5)

    def test_window_takes_maximum(self):
        magnitude = one_hz_bins(spikes={164: 0.3, 165: 0.2, 166: 0.9})
        factory = ChromagramFactory(num_octaves=1, num_harmonics=1, bin_radius=2)
        assert factory.create(magnitude, TwelveTone()).energy(Tone.E) == pytest.approx(0.9)

    def test_window_upper_bound_is_exclusive(self):
        # E window is [163, 167)
        magnitude = one_hz_bins(spikes={167: 1.0})
        factory = ChromagramFactory(num_octaves=1, num_harmonics=1, bin_radius=2)
        assert factory.create(magnitude, TwelveTone()).energy(Tone.E) == 0.0

    def test_radius_scales_with_harmonic(self):
        # Harmonic 2 of E centers on 330 with radius 2 * 2 = 4
        magnitude = one_hz_bins(spikes={326: 1.0})
        factory = ChromagramFactory(num_octaves=1, num_harmonics=2, bin_radius=2)
        assert factory.create(magnitude, TwelveTone()).energy(Tone.E) == pytest.approx(0.5)

    def test_completeness(self):
        chromagram = ChromagramFactory.default().create(one_hz_bins(), TwelveTone())
        assert chromagram.pitch_classes() == tuple(TwelveTone())

    def test_non_negative_energies(self):
        rng = np.random.default_rng(7)
        magnitude = Magnitude(rng.random(8192), 22050)
        chromagram = ChromagramFactory(num_octaves=3, num_harmonics=3).create(magnitude, TwelveTone())
        assert all(energy >= 0 for _, energy in chromagram.items())

    def test_deterministic(self):
        rng = np.random.default_rng(11)
        magnitude = Magnitude(rng.random(8192), 22050)
        factory = ChromagramFactory.default()
        first = factory.create(magnitude, TwelveTone())
        second = factory.create(magnitude, TwelveTone())
        assert first.items() == second.items()

    def test_empty_chroma_gives_empty_chromagram(self):
        chromagram = ChromagramFactory.default().create(one_hz_bins(), EmptyChroma())
        assert len(chromagram) == 0
        assert chromagram.top_k(7) == []

    def test_duplicate_pitch_class_rejected(self):
        with pytest.raises(InvalidInputError):
            ChromagramFactory.default().create(one_hz_bins(), RepeatingChroma())

    def test_rejects_non_magnitude(self):
        with pytest.raises(InvalidInputError):
            ChromagramFactory.default().create(np.ones(4096), TwelveTone())

    def test_e_minor_audio(self, e_minor_audio):
        audio, sr = e_minor_audio
        spectrum = AudioLoader().spectrum(audio, sr, n_fft=8192, offset=0.25)
        chromagram = ChromagramFactory.default().create(spectrum.to_magnitude(), TwelveTone())
        assert set(chromagram.top_k(3)) == {Tone.E, Tone.G, Tone.B}


class TestWindowClamping:
    """Tests for search windows at the spectrum edges."""

    def test_zero_radius_reads_center_bin(self):
        factory = ChromagramFactory(num_octaves=1, num_harmonics=1, bin_radius=0)
        chromagram = factory.create(one_hz_bins(spikes={165: 1.0}), TwelveTone())
        assert chromagram.energy(Tone.E) == pytest.approx(1.0)
        assert chromagram.energy(Tone.F) == 0.0

    def test_window_clamped_at_first_bin(self):
        # With ref 1 Hz every center is bin 1 or 2, so windows start below 0
        factory = ChromagramFactory(num_octaves=1, num_harmonics=1, bin_radius=2, ref_freq=1.0)
        chromagram = factory.create(one_hz_bins(spikes={0: 2.0}), TwelveTone())
        assert chromagram.energy(Tone.C) == pytest.approx(2.0)
        assert chromagram.energy(Tone.B) == pytest.approx(2.0)

    def test_window_clamped_at_last_bin(self):
        # B window [245, 249) straddles the end of a 248-bin spectrum
        factory = ChromagramFactory(num_octaves=1, num_harmonics=1, bin_radius=2)
        magnitude = one_hz_bins(n_bins=248, spikes={247: 1.0})
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            chromagram = factory.create(magnitude, TwelveTone())
        assert chromagram.energy(Tone.B) == pytest.approx(1.0)

    def test_window_beyond_spectrum_reads_last_bin(self):
        factory = ChromagramFactory.default()
        magnitude = one_hz_bins(n_bins=64, spikes={63: 0.5})
        with pytest.warns(UserWarning, match="beyond the last"):
            chromagram = factory.create(magnitude, TwelveTone())
        # Per octave: 0.5 / 1 + 0.5 / 2
        for tone in Tone:
            assert chromagram.energy(tone) == pytest.approx(1.5)

    def test_no_warning_when_windows_fit(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            ChromagramFactory.default().create(one_hz_bins(), TwelveTone())


class TestChromagram:
    """Tests for chromagram lookups and ranking."""

    def test_energy_lookup(self):
        chromagram = Chromagram({Tone.C: 1.0, Tone.D: 2.0})
        assert chromagram.energy(Tone.D) == 2.0
        assert Tone.C in chromagram
        assert Tone.E not in chromagram

    def test_unknown_pitch_class(self):
        chromagram = Chromagram({Tone.C: 1.0})
        with pytest.raises(UnknownPitchClassError):
            chromagram.energy(Tone.E)
        with pytest.raises(KeyError):
            chromagram.energy(Tone.E)

    def test_negative_energy_rejected(self):
        with pytest.raises(InvalidInputError):
            Chromagram({Tone.C: -1.0})

    def test_top_k_sorted_descending(self):
        energies = {tone: float(i % 5) for i, tone in enumerate(Tone)}
        chromagram = Chromagram(energies)
        ranked = chromagram.top_k(12)
        values = [chromagram.energy(t) for t in ranked]
        assert values == sorted(values, reverse=True)

    def test_top_k_ties_follow_enumeration_order(self):
        chromagram = Chromagram({tone: 0.0 for tone in Tone})
        assert chromagram.top_k(3) == [Tone.C, Tone.Cs, Tone.D]

        chromagram = Chromagram({Tone.C: 1.0, Tone.D: 2.0, Tone.E: 1.0, Tone.F: 2.0})
        assert chromagram.top_k(4) == [Tone.D, Tone.F, Tone.C, Tone.E]

    def test_top_k_prefix_property(self):
        rng = np.random.default_rng(3)
        chromagram = Chromagram({tone: float(rng.integers(0, 4)) for tone in Tone})
        for k1 in range(13):
            for k2 in range(k1, 13):
                assert set(chromagram.top_k(k1)) <= set(chromagram.top_k(k2))

    def test_top_k_larger_than_chromagram(self):
        chromagram = Chromagram({Tone.C: 1.0, Tone.G: 3.0})
        assert chromagram.top_k(7) == [Tone.G, Tone.C]

    def test_top_k_negative_rejected(self):
        with pytest.raises(InvalidInputError):
            Chromagram({Tone.C: 1.0}).top_k(-1)

    def test_as_array_in_order(self):
        chromagram = Chromagram({Tone.C: 1.0, Tone.D: 2.0})
        np.testing.assert_array_equal(chromagram.as_array(), [1.0, 2.0])
