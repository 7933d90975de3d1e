from __future__ import annotations

import random

import pytest

from choosy.engine import DISAPPROVAL, CategoryNotFound, EmptyCategory, Engine, RandomSource
from choosy.schema import (
    EvenCategory,
    GaussianCategory,
    InventoryCategory,
    InventoryChoice,
    LotteryCategory,
    LotteryChoice,
    LRUCategory,
    WeightedCategory,
    WeightedChoice,
)


class ScriptedRandom:
    """Returns pre-recorded draws and records what was asked of it."""

    def __init__(self, randranges=(), gausses=()):
        self.randranges = list(randranges)
        self.gausses = list(gausses)
        self.stops = []
        self.sigmas = []

    def randrange(self, stop):
        self.stops.append(stop)
        value = self.randranges.pop(0)
        assert 0 <= value < stop
        return value

    def gauss(self, mu, sigma):
        assert mu == 0.0
        self.sigmas.append(sigma)
        return self.gausses.pop(0)


class RecordingUI:
    def __init__(self, answers, display=False):
        self.answers = list(answers)
        self.display = display
        self.prompts = []
        self.tables = []
        self.messages = []

    def should_display_table(self):
        return self.display

    def display_table(self, table):
        self.tables.append(table)

    def notify(self, message):
        self.messages.append(message)

    def confirm(self, choice):
        self.prompts.append(choice)
        return self.answers.pop(0)


def _pick(category, ui, rng):
    config = {"things": category}
    return Engine(ui, rng).pick(config, "things")


def test_pick_missing_category():
    engine = Engine(RecordingUI([]))
    config = {"things": EvenCategory(choices=["this", "that"])}

    with pytest.raises(CategoryNotFound) as excinfo:
        engine.pick(config, "does not exist")

    assert str(excinfo.value) == "Category does not exist not found in config."


@pytest.mark.parametrize(
    "category",
    [
        EvenCategory(choices=[]),
        LRUCategory(choices=[]),
        GaussianCategory(choices=[]),
        WeightedCategory(choices=[WeightedChoice(name="a", weight=0)]),
        InventoryCategory(choices=[InventoryChoice(name="a", tickets=0)]),
        LotteryCategory(choices=[LotteryChoice(name="a", tickets=0, weight=3)]),
    ],
)
def test_pick_empty_category_raises_before_prompting(category):
    ui = RecordingUI([])

    with pytest.raises(EmptyCategory):
        _pick(category, ui, ScriptedRandom())

    assert ui.prompts == []


def test_pick_even_reject_then_accept():
    choices = ["this", "that", "the other"]
    category = EvenCategory(choices=list(choices))
    ui = RecordingUI([False, True])
    rng = ScriptedRandom(randranges=[0, 0])

    result = _pick(category, ui, rng)

    assert result == "that"
    assert ui.prompts == ["this", "that"]
    assert rng.stops == [3, 2]
    assert category.choices == choices
    assert ui.messages == []
    assert ui.tables == []


def test_even_matches_weighted_with_unit_weights():
    names = ["this", "that", "the other"]
    even_ui = RecordingUI([False, True], display=True)
    weighted_ui = RecordingUI([False, True], display=True)

    even = _pick(EvenCategory(choices=names), even_ui, ScriptedRandom(randranges=[2, 1]))
    weighted = _pick(
        WeightedCategory(choices=[WeightedChoice(name=n) for n in names]),
        weighted_ui,
        ScriptedRandom(randranges=[2, 1]),
    )

    assert even == weighted == "that"
    assert even_ui.prompts == weighted_ui.prompts == ["the other", "that"]
    assert even_ui.tables == weighted_ui.tables


def test_pick_weighted_skips_zero_weights():
    category = WeightedCategory(
        choices=[
            WeightedChoice(name="never", weight=0),
            WeightedChoice(name="rare", weight=1),
            WeightedChoice(name="common", weight=5),
        ]
    )
    ui = RecordingUI([True])
    rng = ScriptedRandom(randranges=[1])

    result = _pick(category, ui, rng)

    assert result == "common"
    assert rng.stops == [6]
    assert [c.weight for c in category.choices] == [0, 1, 5]


def test_weighted_chance_table():
    category = WeightedCategory(
        choices=[
            WeightedChoice(name="heavy", weight=6),
            WeightedChoice(name="light", weight=1),
            WeightedChoice(name="middle", weight=3),
        ]
    )
    ui = RecordingUI([True], display=True)

    _pick(category, ui, ScriptedRandom(randranges=[7]))

    (table,) = ui.tables
    assert table.header == ["Name", "Weight", "Chance"]
    assert [row.cells[0] for row in table.rows] == ["light", "middle", "heavy"]
    assert [row.chosen for row in table.rows] == [False, True, False]
    assert table.rows[1].cells[2] == pytest.approx(30.0)
    assert sum(row.cells[2] for row in table.rows) == pytest.approx(100.0)
    assert table.footer == ["Total", 10, 100.0]


def test_weighted_rejecting_every_candidate_disapproves_once():
    category = WeightedCategory(
        choices=[WeightedChoice(name="a", weight=1), WeightedChoice(name="b", weight=1)]
    )
    ui = RecordingUI([False, False, True])
    rng = ScriptedRandom(randranges=[0, 0, 0])

    result = _pick(category, ui, rng)

    assert result == "a"
    assert ui.prompts == ["a", "b", "a"]
    assert ui.messages == [DISAPPROVAL]
    assert rng.stops == [2, 1, 2]


def test_pick_inventory():
    category = InventoryCategory(
        choices=[
            InventoryChoice(name="this", tickets=0),
            InventoryChoice(name="that", tickets=2),
            InventoryChoice(name="the other", tickets=3),
        ]
    )
    ui = RecordingUI([False, False, False, True])
    rng = ScriptedRandom(randranges=[0, 0, 0, 0])

    result = _pick(category, ui, rng)

    assert result == "the other"
    assert "this" not in ui.prompts
    assert ui.prompts == ["that", "the other", "that", "the other"]
    assert ui.messages == [DISAPPROVAL]
    assert rng.stops == [5, 3, 5, 3]
    assert [c.tickets for c in category.choices] == [0, 2, 2]


def test_inventory_chance_table_uses_tickets():
    category = InventoryCategory(
        choices=[
            InventoryChoice(name="this", tickets=0),
            InventoryChoice(name="that", tickets=1),
            InventoryChoice(name="the other", tickets=3),
        ]
    )
    ui = RecordingUI([True], display=True)

    _pick(category, ui, ScriptedRandom(randranges=[0]))

    (table,) = ui.tables
    assert [row.cells[:2] for row in table.rows] == [["that", 1], ["the other", 3]]
    assert [row.chosen for row in table.rows] == [True, False]
    assert table.rows[0].cells[2] == pytest.approx(25.0)
    assert table.footer == ["Total", 4, 100.0]


def test_pick_lottery():
    category = LotteryCategory(
        choices=[
            LotteryChoice(name="this", tickets=1, weight=1),
            LotteryChoice(name="that", tickets=2, weight=4),
            LotteryChoice(name="the other", tickets=3, weight=9),
        ]
    )
    ui = RecordingUI([True])

    result = _pick(category, ui, ScriptedRandom(randranges=[0]))

    assert result == "this"
    assert [c.tickets for c in category.choices] == [0, 6, 12]


def test_lottery_ineligible_entries_still_accumulate():
    category = LotteryCategory(
        choices=[
            LotteryChoice(name="waiting", tickets=0, weight=2),
            LotteryChoice(name="only", tickets=1, weight=5),
        ]
    )
    ui = RecordingUI([True])

    result = _pick(category, ui, ScriptedRandom(randranges=[0]))

    assert result == "only"
    assert ui.prompts == ["only"]
    assert [c.tickets for c in category.choices] == [2, 0]


def test_pick_lru():
    category = LRUCategory(choices=["this", "that", "the other"])
    ui = RecordingUI([False, True])

    result = _pick(category, ui, ScriptedRandom())

    assert result == "that"
    assert category.choices == ["this", "the other", "that"]


def test_lru_tables_list_remaining_choices_most_recent_first():
    category = LRUCategory(choices=["this", "that", "the other"])
    ui = RecordingUI([False, True], display=True)

    _pick(category, ui, ScriptedRandom())

    first, second = ui.tables
    assert first.header == ["Name"]
    assert first.footer == []
    assert [row.cells for row in first.rows] == [["the other"], ["that"], ["this"]]
    assert [row.chosen for row in first.rows] == [False, False, True]
    assert [row.cells for row in second.rows] == [["the other"], ["that"]]
    assert [row.chosen for row in second.rows] == [False, True]


def test_lru_restarts_scan_after_rejecting_everything():
    category = LRUCategory(choices=["a", "b"])
    ui = RecordingUI([False, False, True])

    result = _pick(category, ui, ScriptedRandom())

    assert result == "a"
    assert ui.prompts == ["a", "b", "a"]
    assert ui.messages == [DISAPPROVAL]
    assert category.choices == ["b", "a"]


def test_pick_gaussian():
    category = GaussianCategory(choices=["this", "that", "the other"])
    ui = RecordingUI([True])
    rng = ScriptedRandom(gausses=[-1.4])

    result = _pick(category, ui, rng)

    assert result == "that"
    assert rng.sigmas == [pytest.approx(1.0)]
    assert category.choices == ["this", "the other", "that"]


def test_gaussian_redraws_out_of_range_and_shrinks_stddev():
    category = GaussianCategory(choices=["a", "b", "c"], stddev_scaling_factor=3.0)
    ui = RecordingUI([False, True])
    rng = ScriptedRandom(gausses=[-3.5, 0.2, 0.9])

    result = _pick(category, ui, rng)

    assert result == "b"
    assert ui.prompts == ["a", "b"]
    assert ui.messages == []
    assert rng.sigmas == [pytest.approx(1.0), pytest.approx(1.0), pytest.approx(2 / 3)]
    assert category.choices == ["a", "c", "b"]


def test_gaussian_rejecting_every_candidate_disapproves_once():
    category = GaussianCategory(choices=["a", "b"], stddev_scaling_factor=2.0)
    ui = RecordingUI([False, False, True])
    rng = ScriptedRandom(gausses=[0.5, 0.1, 1.5])

    result = _pick(category, ui, rng)

    assert result == "b"
    assert ui.prompts == ["a", "b", "b"]
    assert ui.messages == [DISAPPROVAL]
    assert rng.sigmas == [pytest.approx(1.0), pytest.approx(0.5), pytest.approx(1.0)]
    assert category.choices == ["a", "b"]


def test_gaussian_chance_table():
    category = GaussianCategory(choices=["this", "that", "the other"])
    ui = RecordingUI([True], display=True)

    _pick(category, ui, ScriptedRandom(gausses=[2.5]))

    (table,) = ui.tables
    assert table.header == ["Name", "Chance"]
    assert [row.cells[0] for row in table.rows] == ["this", "that", "the other"]
    assert [row.chosen for row in table.rows] == [False, False, True]
    chances = [row.cells[1] for row in table.rows]
    assert chances == pytest.approx([68.27, 27.18, 4.28], abs=0.01)
    assert table.footer[0] == "Total"
    assert table.footer[1] == pytest.approx(99.73, abs=0.01)


def test_seeded_random_is_reproducible():
    def run():
        category = WeightedCategory(
            choices=[WeightedChoice(name=n, weight=w) for n, w in [("a", 1), ("b", 2), ("c", 3)]]
        )
        ui = RecordingUI([False, False, True])
        return _pick(category, ui, random.Random(37)), ui.prompts

    assert run() == run()


def test_set_rng_replaces_source():
    engine = Engine(RecordingUI([True]))
    rng = ScriptedRandom(randranges=[1])
    engine.set_rng(rng)

    result = engine.pick({"things": EvenCategory(choices=["a", "b"])}, "things")

    assert result == "b"
    assert rng.stops == [2]


def test_engine_accepts_any_random_source():
    rng: RandomSource = ScriptedRandom(randranges=[0], gausses=[0.4])
    engine = Engine(RecordingUI([True, True]), rng)
    config = {
        "even": EvenCategory(choices=["a", "b"]),
        "gaussian": GaussianCategory(choices=["c", "d"]),
    }

    assert engine.pick(config, "even") == "a"
    assert engine.pick(config, "gaussian") == "c"
    assert config["gaussian"].choices == ["d", "c"]
