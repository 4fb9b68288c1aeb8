from itertools import islice

from xvkit.parkmiller import ParkMiller, do_rand


def test_zero_state_gives_multiplier_minus_one():
    assert do_rand(0) == 16806


def test_state_is_reduced_modulo():
    assert do_rand(0x7FFFFFFE) == do_rand(0)


def test_next_matches_do_rand():
    gen = ParkMiller(31)
    first = gen.next()
    assert first == do_rand(31)
    assert gen.next() == do_rand(first)


def test_default_seed_is_one():
    assert ParkMiller().next() == do_rand(1)


def test_iteration_matches_next():
    a = ParkMiller(7177)
    b = ParkMiller(7177)
    assert list(islice(a, 20)) == [b.next() for _ in range(20)]


def test_values_in_range():
    values = list(islice(ParkMiller(12345), 1000))
    assert all(0 <= v <= 0x7FFFFFFD for v in values)
    assert len(set(values)) == len(values)


def test_state_follows_output():
    gen = ParkMiller(5)
    value = gen.next()
    assert gen.state == value