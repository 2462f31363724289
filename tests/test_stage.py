import pytest

from synthkit.exceptions import InvalidArgumentError
from synthkit.synthetic.stage import Stage


def test_parse_accepts_names_aliases_and_none() -> None:
    assert Stage.parse("early") is Stage.EARLY
    assert Stage.parse(" Growth ") is Stage.GROWTH
    assert Stage.parse("ENTERPRISE") is Stage.ENTERPRISE
    assert Stage.parse("startup") is Stage.EARLY
    assert Stage.parse(None) is Stage.GROWTH
    assert Stage.parse(Stage.ENTERPRISE) is Stage.ENTERPRISE


def test_parse_rejects_unknown_stage() -> None:
    with pytest.raises(InvalidArgumentError, match="Unknown stage"):
        Stage.parse("seed-round")


def test_unknown_stage_is_also_a_value_error() -> None:
    with pytest.raises(ValueError):
        Stage.parse("ipo")


@pytest.mark.parametrize(
    "attribute", ["amount_multiplier", "count_multiplier", "volume_multiplier"]
)
def test_multipliers_increase_with_stage(attribute: str) -> None:
    early, growth, enterprise = (
        getattr(stage, attribute) for stage in (Stage.EARLY, Stage.GROWTH, Stage.ENTERPRISE)
    )
    assert early < growth < enterprise
    assert growth == 1.0


def test_amount_multiplier_values() -> None:
    assert Stage.EARLY.amount_multiplier == 0.7
    assert Stage.ENTERPRISE.amount_multiplier == 1.4
