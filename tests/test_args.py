import pytest

from philo.args import (
    InvalidArgumentError,
    Settings,
    UsageError,
    parse_args,
    parse_int,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("42", 42),
        ("+7", 7),
        ("-5", -5),
        ("  12", 12),
        ("\t\n\v\f\r 9", 9),
        ("007", 7),
        ("2147483647", 2147483647),
        ("-2147483648", -2147483648),
    ],
)
def test_parse_int_valid(text, expected):
    assert parse_int(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "+", "-", "abc", "12a", "1 ", "a1", "--1", "+-1", "1.5", "١٢"],
)
def test_parse_int_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_int(text)


def test_parse_int_truncates_to_32_bits():
    assert parse_int("2147483648") < 0
    assert parse_int("4294967296") == 0


def test_parse_args_without_meal_target():
    settings = parse_args(["5", "800", "200", "200"])
    assert settings == Settings(5, 800, 200, 200)
    assert settings.must_eat is None


def test_parse_args_with_meal_target():
    settings = parse_args(["4", "410", "200", "200", "7"])
    assert settings.num_philos == 4
    assert settings.time_to_die == 410
    assert settings.time_to_eat == 200
    assert settings.time_to_sleep == 200
    assert settings.must_eat == 7


def test_parse_args_accepts_signs_and_spaces():
    settings = parse_args([" +3", "100", "50", "50"])
    assert settings.num_philos == 3


@pytest.mark.parametrize(
    "args",
    [[], ["1"], ["1", "2", "3"], ["1", "2", "3", "4", "5", "6"]],
)
def test_parse_args_wrong_count(args):
    with pytest.raises(UsageError) as info:
        parse_args(args)
    assert not isinstance(info.value, InvalidArgumentError)
    assert str(info.value) == "Usage: ./philo nbr die eat sleep [must_eat]"


@pytest.mark.parametrize(
    "args",
    [
        ["0", "800", "200", "200"],
        ["5", "-800", "200", "200"],
        ["5", "800", "abc", "200"],
        ["5", "800", "200", "200x"],
        ["5", "800", "200", "200", "0"],
        ["5", "800", "200", "200", ""],
    ],
)
def test_parse_args_invalid_values(args):
    with pytest.raises(InvalidArgumentError) as info:
        parse_args(args)
    assert str(info.value) == "These are not the args you were looking for"


def test_count_checked_before_values():
    with pytest.raises(UsageError) as info:
        parse_args(["abc", "0", "-1"])
    assert not isinstance(info.value, InvalidArgumentError)


def test_settings_is_immutable():
    settings = parse_args(["2", "100", "50", "50"])
    with pytest.raises(AttributeError):
        settings.num_philos = 3
    assert settings.num_philos == 2