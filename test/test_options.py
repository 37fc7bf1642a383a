import json

import pytest

from roulette import InvalidInput, Option, OptionsConfig, normalize_options, parse_weight, validate_options


@pytest.mark.parametrize(
    "raw, expected",
    [
        (3, 3),
        ("3", 3),
        (" 4 ", 4),
        ("5kg", 5),
        ("+2", 2),
        (2.9, 2),
        (None, 1),
        ("", 1),
        (0, 1),
        ("0", 1),
        (0.4, 1),
        (True, 1),
        ("-3", -3),
    ],
)
def test_parse_weight(raw, expected):
    assert parse_weight(raw) == expected


def test_parse_weight_warns_on_garbage():
    with pytest.warns(UserWarning):
        assert parse_weight("heavy") == 1
    with pytest.warns(UserWarning):
        assert parse_weight(float("nan")) == 1


def test_parse_weight_custom_default():
    assert parse_weight(None, default=7) == 7


def test_option_is_immutable():
    option = Option("A", 1)
    with pytest.raises(AttributeError):
        option.weight = 5


def test_option_dict_round_trip():
    option = Option("Ramen", 4)
    assert option.to_dict() == {"name": "Ramen", "weight": 4}
    assert Option.from_dict({"name": "Ramen", "weight": 4}) == option


def test_normalize_options_accepts_mixed_inputs():
    options = normalize_options([
        {"name": "A", "weight": "2"},
        ("B", None),
        "C",
        Option("D", 5),
        ["E", "x"],
    ])
    assert options == [Option("A", 2), Option("B", 1), Option("C", 1), Option("D", 5), Option("E", 1)]


@pytest.mark.parametrize("raw", [{"name": "", "weight": 1}, {"name": "   "}, {"weight": 2}, ("A", -1)])
def test_normalize_options_rejects(raw):
    with pytest.raises(InvalidInput):
        normalize_options([raw])


def test_normalize_options_rejects_unreadable_entry():
    with pytest.raises(InvalidInput):
        normalize_options([42])


def test_validate_options():
    items = [Option("A", 1), Option("B", 1)]
    assert validate_options(items) == tuple(items)
    for bad in ([], None, [Option("A", 1)]):
        with pytest.raises(InvalidInput, match="At least 2"):
            validate_options(bad)


def test_config_from_dict():
    config = OptionsConfig.from_dict({"options": ["A", {"name": "B", "weight": 3}], "trial_count": 200, "seed": 9})
    assert config.options() == [Option("A", 1), Option("B", 3)]
    assert config.trial_count == 200
    assert config.seed == 9


def test_config_from_specs():
    config = OptionsConfig.from_specs(["Pizza:3", "Sushi", "Time: 10:2"])
    assert config.options() == [Option("Pizza", 3), Option("Sushi", 1), Option("Time: 10", 2)]


def test_config_from_json_file(tmp_path):
    path = tmp_path / "options.json"
    path.write_text(json.dumps({"options": [{"name": "A", "weight": 2}, {"name": "B"}], "description": "Lunch"}))
    config = OptionsConfig.from_file(path)
    assert config.options() == [Option("A", 2), Option("B", 1)]
    assert config.description == "Lunch"


def test_config_from_json_list(tmp_path):
    path = tmp_path / "options.json"
    path.write_text(json.dumps(["A", "B"]))
    assert OptionsConfig.from_file(path).options() == [Option("A", 1), Option("B", 1)]


def test_config_from_csv_file(tmp_path):
    path = tmp_path / "options.csv"
    path.write_text("name,weight\nA,2\nB,\n,5\nC,4\n")
    assert OptionsConfig.from_file(path).options() == [Option("A", 2), Option("B", 1), Option("C", 4)]


def test_config_from_text_file(tmp_path):
    path = tmp_path / "options.txt"
    path.write_text("# lunch\nCurry, 3\n\nSalad\n")
    assert OptionsConfig.from_file(path).options() == [Option("Curry", 3), Option("Salad", 1)]


def test_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        OptionsConfig.from_file(tmp_path / "missing.json")


def test_config_unsupported_format(tmp_path):
    path = tmp_path / "options.yaml"
    path.write_text("- A\n")
    with pytest.raises(ValueError, match="Unsupported"):
        OptionsConfig.from_file(path)


def test_normalize_options_rejects_weight_too_large_for_float():
    with pytest.raises(InvalidInput, match="too large"):
        normalize_options([("A", "9" * 400)])
    with pytest.raises(InvalidInput, match="too large"):
        normalize_options([("A", 10 ** 400)])
