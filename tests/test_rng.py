import pytest

from pandemic.rng import RandomGenerator


def draws(gen, count=50):
    return [gen.random(0, 1000) for _ in range(count)]


def test_same_seed_gives_same_sequence():
    first = draws(RandomGenerator(42))
    second = draws(RandomGenerator(42))
    assert len(first) == 50
    assert all(0 <= v <= 1000 for v in first)
    assert len(set(first)) > 10
    assert first == second


def test_different_seeds_give_different_sequences():
    assert draws(RandomGenerator(1)) != draws(RandomGenerator(2))
    assert len(set(draws(RandomGenerator(1)))) > 1


def test_negative_seed_acts_as_positive():
    assert draws(RandomGenerator(-123)) == draws(RandomGenerator(123))


def test_seed_is_masked_to_31_bits():
    assert draws(RandomGenerator(2**31 + 9)) == draws(RandomGenerator(9))


def test_reseeding_restarts_sequence():
    gen = RandomGenerator(77)
    first = draws(gen, 10)
    gen.set_random_seed(77)
    assert draws(gen, 10) == first


@pytest.mark.parametrize("low, high", [(0, 3), (-5, 5), (25, 40), (2, 2)])
def test_random_stays_in_interval(low, high):
    gen = RandomGenerator(5)
    values = [gen.random(low, high) for _ in range(500)]
    assert all(low <= v <= high for v in values)


def test_random_covers_small_interval():
    gen = RandomGenerator(11)
    assert {gen.random(0, 3) for _ in range(400)} == {0, 1, 2, 3}


def test_empty_interval_returns_low_without_advancing():
    gen = RandomGenerator(7)
    assert gen.random(5, 3) == 5
    assert gen.uniform() == RandomGenerator(7).uniform()


def test_too_long_interval_returns_low_without_advancing():
    gen = RandomGenerator(7)
    assert gen.random(0, 10**6) == 0
    assert gen.uniform() == RandomGenerator(7).uniform()


def test_uniform_in_unit_interval():
    gen = RandomGenerator(3)
    values = [gen.uniform() for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)


@pytest.mark.parametrize("n", [0, 1, 2, 10, 57])
def test_random_permutation_is_permutation(n):
    assert sorted(RandomGenerator(9).random_permutation(n)) == list(range(n))


def test_random_permutation_is_deterministic():
    first = RandomGenerator(4).random_permutation(30)
    second = RandomGenerator(4).random_permutation(30)
    assert sorted(first) == list(range(30))
    assert first != list(range(30))
    assert first == second


@pytest.mark.parametrize("n", [-1, 10**6 + 1])
def test_random_permutation_out_of_range(n):
    assert RandomGenerator(1).random_permutation(n) == []


def test_bernoulli_extremes():
    gen = RandomGenerator(13)
    assert not any(gen.bernoulli(0.0) for _ in range(300))
    assert all(gen.bernoulli(1.0) for _ in range(300))


def test_bernoulli_above_one_and_below_zero():
    gen = RandomGenerator(13)
    assert all(gen.bernoulli(float("inf")) for _ in range(50))
    assert not any(gen.bernoulli(-2.0) for _ in range(50))


def test_bernoulli_half_is_mixed():
    gen = RandomGenerator(21)
    results = [gen.bernoulli(0.5) for _ in range(1000)]
    assert 300 < sum(results) < 700