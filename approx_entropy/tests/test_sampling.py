"""
Tests for the subsampling methods.

Run with: pytest approx_entropy/tests/test_sampling.py -v
"""

import numpy as np
import pytest
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from approx_entropy.sampling import Bootstrap, FixedPartition, SamplingMethod
from approx_entropy.exceptions import (
    HighDegree,
    Immutable,
    LowNumGroups,
    NullRepetition,
    NullSubsampleSize,
    PartitionExhausted,
    TooFewSamples,
    TooManyRepetitions,
    TooManySubsampleSizes,
)


class TestBootstrap:
    """Test randomized bootstrap subsampling."""

    @pytest.fixture
    def bootstrap(self):
        return Bootstrap([1, 2, 3, 4, 5, 6], num_groups=3, degree=2, rng=1)

    def test_is_sampling_method(self, bootstrap):
        assert isinstance(bootstrap, SamplingMethod)

    def test_schedule(self, bootstrap):
        """Sizes halve while repetitions double."""
        assert bootstrap.size_subsamples() == [10, 5, 2]
        assert bootstrap.samples_rep() == [1, 2, 4]
        assert bootstrap.total_samples() == 7

    def test_subsample_sizes(self, bootstrap):
        assert bootstrap.subsample_sizes().tolist() == [10, 5, 5, 2, 2, 2, 2]

    def test_naive_entropies_layout(self, bootstrap):
        """Observations come grouped in schedule order."""
        observations = bootstrap.naive_entropies()
        assert len(observations) == bootstrap.total_samples()
        assert [size for size, _ in observations] == [10, 5, 5, 2, 2, 2, 2]
        for size, value in observations:
            assert 0.0 <= value <= np.log(min(size, 6)) + 1e-12

    def test_reproducible_with_seed(self):
        """The same seed gives the same observations."""
        first = Bootstrap([1, 2, 3, 4, 5, 6], 3, 2, rng=42).naive_entropies()
        second = Bootstrap([1, 2, 3, 4, 5, 6], 3, 2, rng=42).naive_entropies()
        assert first == second

    def test_generator_used_as_is(self):
        rng = np.random.default_rng(0)
        bootstrap = Bootstrap([4, 4], 2, 1, rng=rng)
        assert bootstrap._rng is rng

    def test_draws_without_replacement(self):
        """Drawing 8 of 16 distinct samples always yields 8 distinct values."""
        bootstrap = Bootstrap([1] * 16, num_groups=1, degree=0, rng=3)
        for _ in range(5):
            [(size, value)] = bootstrap.naive_entropies()
            assert size == 8
            assert value == pytest.approx(np.log(8))

    def test_single_category(self):
        bootstrap = Bootstrap([32], num_groups=4, degree=2, rng=0)
        assert all(value == 0.0 for _, value in bootstrap.naive_entropies())

    def test_low_num_groups(self):
        with pytest.raises(LowNumGroups):
            Bootstrap([1, 2, 3, 4, 5, 6], num_groups=2, degree=2)

    def test_too_few_samples(self):
        """The smallest subsample must hold at least one sample."""
        with pytest.raises(TooFewSamples):
            Bootstrap([1, 1, 1], num_groups=2, degree=1)
        Bootstrap([1, 1, 1, 1], num_groups=2, degree=1)

    def test_negative_degree(self):
        with pytest.raises(ValueError):
            Bootstrap([4, 4], num_groups=2, degree=-1)

    def test_set_degree(self, bootstrap):
        assert bootstrap.set_degree(1) is bootstrap
        assert bootstrap.degree == 1
        with pytest.raises(HighDegree):
            bootstrap.set_degree(3)
        assert bootstrap.degree == 1

    def test_set_num_groups(self, bootstrap):
        bootstrap.set_num_groups(4)
        assert bootstrap.num_groups == 4
        assert bootstrap.size_subsamples() == [10, 5, 2, 1]
        assert bootstrap.samples_rep() == [1, 2, 4, 8]

    def test_set_num_groups_low(self, bootstrap):
        with pytest.raises(LowNumGroups):
            bootstrap.set_num_groups(2)
        assert bootstrap.num_groups == 3

    def test_set_num_groups_too_few_samples(self, bootstrap):
        """21 samples cannot feed 5 halvings."""
        with pytest.raises(TooFewSamples):
            bootstrap.set_num_groups(5)
        assert bootstrap.num_groups == 3

    def test_set_distribution(self, bootstrap):
        bootstrap.set_distribution([4, 4])
        assert bootstrap.sample_size == 8
        assert bootstrap.size_subsamples() == [4, 2, 1]

    def test_set_distribution_too_few_samples(self, bootstrap):
        with pytest.raises(TooFewSamples):
            bootstrap.set_distribution([1, 1])
        assert bootstrap.sample_size == 21


class TestFixedPartition:
    """Test deterministic fixed-partition subsampling."""

    @pytest.fixture
    def fixed(self):
        return FixedPartition([0, 0, 0, 1, 1, 2], [3, 2, 1], [1, 1, 1], degree=2)

    def test_schedule(self, fixed):
        assert fixed.size_subsamples() == [3, 2, 1]
        assert fixed.samples_rep() == [1, 1, 1]
        assert fixed.total_samples() == 3
        assert fixed.num_groups == 3

    def test_naive_entropies(self, fixed):
        """Chunks are taken from the end of the samples, in order."""
        observations = fixed.naive_entropies()
        assert [size for size, _ in observations] == [3, 2, 1]
        # [1, 1, 2], then [0, 0], then [0]
        expected = [-(2 / 3) * np.log(2 / 3) - (1 / 3) * np.log(1 / 3), 0.0, 0.0]
        for (_, value), expected_value in zip(observations, expected):
            assert value == pytest.approx(expected_value, abs=1e-6)

    @pytest.mark.parametrize(
        "samples, size_subsamples, samples_rep, degree, expected",
        [
            ([0, 0, 0, 1, 1, 1, 1, 2, 2, 2], [3, 2, 1], [1, 2, 3], 2, [0.0] * 6),
            ([0, 1, 0, 1, 0, 0, 1, 1], [4, 2], [1, 2], 1, [np.log(2)] * 3),
        ],
        ids=["all_zeros", "all_halves"]
    )
    def test_naive_entropy_values(self, samples, size_subsamples, samples_rep, degree, expected):
        fixed = FixedPartition(samples, size_subsamples, samples_rep, degree)
        values = [value for _, value in fixed.naive_entropies()]
        assert len(values) == len(expected)
        for value, expected_value in zip(values, expected):
            assert value == pytest.approx(expected_value, abs=1e-6)

    def test_design_matrix(self, fixed):
        expected = np.array([
            [3.0, 1.0, 1 / 3],
            [2.0, 1.0, 0.5],
            [1.0, 1.0, 1.0],
        ])
        np.testing.assert_allclose(fixed.design_matrix(), expected, atol=1e-12)

    def test_design_matrix_repeats_rows(self):
        fixed = FixedPartition([0] * 8, [4, 2], [1, 2], degree=1)
        assert fixed.design_matrix().shape == (3, 2)
        np.testing.assert_allclose(fixed.design_matrix()[:, 1], [1.0, 1.0, 1.0])

    def test_extra_samples_allowed(self):
        FixedPartition([1] * 100, [3, 2, 1], [1, 2, 3], degree=2)

    @pytest.mark.parametrize(
        "samples, size_subsamples, samples_rep, degree, error",
        [
            ([0] * 6, [3, 2], [1, 1], 2, LowNumGroups),
            ([0] * 6, [3, 2, 1], [1, 1, 1, 1], 2, TooManyRepetitions),
            ([0] * 6, [3, 2, 1], [1, 1], 1, TooManySubsampleSizes),
            ([0] * 6, [3, 2, 1], [1, 0, 1], 2, NullRepetition),
            ([0] * 6, [3, 0, 1], [1, 1, 1], 2, NullSubsampleSize),
            ([0] * 5, [3, 2, 1], [1, 1, 1], 2, TooFewSamples),
        ],
        ids=[
            "low_num_groups",
            "too_many_repetitions",
            "too_many_subsample_sizes",
            "null_repetition",
            "null_subsample_size",
            "too_few_samples",
        ]
    )
    def test_construction_errors(self, samples, size_subsamples, samples_rep, degree, error):
        with pytest.raises(error):
            FixedPartition(samples, size_subsamples, samples_rep, degree)

    def test_immutable_schedule(self, fixed):
        with pytest.raises(Immutable):
            fixed.set_num_groups(4)
        with pytest.raises(Immutable):
            fixed.set_distribution([1, 2, 3])

    def test_set_degree(self, fixed):
        fixed.set_degree(1)
        assert fixed.degree == 1
        with pytest.raises(HighDegree):
            fixed.set_degree(3)

    def test_consumption_is_destructive(self, fixed):
        """The buffer shrinks by the samples used in a run."""
        assert fixed.remaining == 6
        fixed.naive_entropies()
        assert fixed.remaining == 0

    def test_exhausted_partition_fails(self, fixed):
        """Re-running after exhaustion raises instead of returning nothing."""
        fixed.naive_entropies()
        with pytest.raises(PartitionExhausted):
            fixed.naive_entropies()
        with pytest.raises(PartitionExhausted):
            fixed.naive_entropies()
        assert fixed.remaining == 0

    def test_partial_leftover_is_not_consumed(self):
        fixed = FixedPartition([0, 1] * 5, [3, 2, 1], [1, 1, 1], degree=2)
        fixed.naive_entropies()
        assert fixed.remaining == 4
        with pytest.raises(PartitionExhausted):
            fixed.naive_entropies()
        assert fixed.remaining == 4

    def test_second_run_with_extra_samples(self):
        fixed = FixedPartition([0, 1] * 6, [3, 2, 1], [1, 1, 1], degree=2)
        assert len(fixed.naive_entropies()) == 3
        assert len(fixed.naive_entropies()) == 3
        assert fixed.remaining == 0

    def test_reset(self, fixed):
        """A reset replays the same partition."""
        first = fixed.naive_entropies()
        second = fixed.reset().naive_entropies()
        assert first == second

    def test_shuffle_keeps_samples(self):
        samples = list(range(20))
        fixed = FixedPartition(samples, [10, 5], [1, 2], degree=1)
        fixed.shuffle(rng=0)
        assert fixed.remaining == 20
        assert sorted(fixed._buffer) == samples

    def test_shuffled_run(self):
        """Any order of the balanced samples gives a valid partition."""
        fixed = FixedPartition(["a", "b"] * 4, [4, 2], [1, 2], degree=1)
        observations = fixed.shuffle(rng=5).naive_entropies()
        assert [size for size, _ in observations] == [4, 2, 2]
        assert all(0.0 <= value <= np.log(2) + 1e-12 for _, value in observations)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
