"""
The selection engine.

``Engine.pick`` looks up a category, runs the algorithm named by its ``model``
tag, asks the UI for consent until a candidate is accepted, and updates the
category in place so that future picks depend on this one. Saving the updated
config is left to the caller.
"""
from __future__ import annotations

import bisect
import itertools
import logging
import random
from statistics import NormalDist
from typing import Callable, List, MutableMapping, NamedTuple, Optional, Protocol

from .schema import (
    Category,
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
from .ui import UI, Cell, Row, Table

logger = logging.getLogger(__name__)

DISAPPROVAL = "🤨"


class ChoosyError(Exception):
    """Base class for errors raised while picking."""


class CategoryNotFound(ChoosyError):
    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Category {category} not found in config.")


class EmptyCategory(ChoosyError):
    """Raised when a category has no choice that could ever be drawn."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Category {category} has no eligible choices.")


class RandomSource(Protocol):
    """The subset of ``random.Random`` the engine draws from."""

    def randrange(self, stop: int) -> int:
        ...

    def gauss(self, mu: float, sigma: float) -> float:
        ...


class Candidate(NamedTuple):
    index: int
    name: str
    weight: int


def _has_eligible_choices(category: Category) -> bool:
    if isinstance(category, (InventoryCategory, LotteryCategory)):
        return any(c.tickets > 0 for c in category.choices)
    if isinstance(category, WeightedCategory):
        return any(c.weight > 0 for c in category.choices)
    return bool(category.choices)


class Engine:
    """
    Picks items from categories, talking to the user through ``ui``.

    ``rng`` is a ``RandomSource``: anything with the ``randrange`` and
    ``gauss`` methods of ``random.Random``. Pass a seeded instance for
    reproducible picks; the default is an unseeded ``random.Random``.
    """

    def __init__(self, ui: UI, rng: Optional[RandomSource] = None):
        self.ui = ui
        self.rng = rng if rng is not None else random.Random()

    def set_rng(self, rng: RandomSource) -> None:
        self.rng = rng

    def pick(self, config: MutableMapping[str, Category], category: str) -> str:
        """
        Pick an item from ``config[category]`` and return its name.

        Gaussian, inventory, lottery and LRU categories are updated in place.
        Raises ``CategoryNotFound`` if the category does not exist and
        ``EmptyCategory`` if nothing in it can be drawn.
        """
        try:
            entry = config[category]
        except KeyError:
            raise CategoryNotFound(category) from None

        if not _has_eligible_choices(entry):
            raise EmptyCategory(category)

        logger.debug("Picking from %s with the %s model", category, entry.model)
        if isinstance(entry, EvenCategory):
            return self._pick_even(entry.choices)
        if isinstance(entry, WeightedCategory):
            return self._pick_weighted(entry.choices)
        if isinstance(entry, GaussianCategory):
            return self._pick_gaussian(entry.choices, entry.stddev_scaling_factor)
        if isinstance(entry, InventoryCategory):
            return self._pick_inventory(entry.choices)
        if isinstance(entry, LotteryCategory):
            return self._pick_lottery(entry.choices)
        if isinstance(entry, LRUCategory):
            return self._pick_lru(entry.choices)
        raise TypeError(f"Unsupported category type: {type(entry).__name__}")

    def _express_disapproval(self) -> None:
        logger.debug("Every candidate was rejected, starting over")
        self.ui.notify(DISAPPROVAL)

    # ---------- Models ----------

    def _pick_even(self, choices: List[str]) -> str:
        def initialize_candidates() -> List[Candidate]:
            return [Candidate(i, name, 1) for i, name in enumerate(choices)]

        index = self._pick_weighted_common(initialize_candidates)
        return choices[index]

    def _pick_weighted(self, choices: List[WeightedChoice]) -> str:
        def initialize_candidates() -> List[Candidate]:
            return [
                Candidate(i, c.name, c.weight)
                for i, c in enumerate(choices)
                if c.weight > 0
            ]

        index = self._pick_weighted_common(initialize_candidates)
        return choices[index].name

    def _pick_inventory(self, choices: List[InventoryChoice]) -> str:
        def initialize_candidates() -> List[Candidate]:
            return [
                Candidate(i, c.name, c.tickets)
                for i, c in enumerate(choices)
                if c.tickets > 0
            ]

        winner = choices[self._pick_weighted_common(initialize_candidates)]
        winner.tickets = max(winner.tickets - 1, 0)
        return winner.name

    def _pick_lottery(self, choices: List[LotteryChoice]) -> str:
        def initialize_candidates() -> List[Candidate]:
            return [
                Candidate(i, c.name, c.tickets)
                for i, c in enumerate(choices)
                if c.tickets > 0
            ]

        winner = choices[self._pick_weighted_common(initialize_candidates)]
        for choice in choices:
            choice.tickets += choice.weight
        winner.tickets = 0
        return winner.name

    def _pick_gaussian(self, choices: List[str], stddev_scaling_factor: float) -> str:
        """
        Draw from a normal distribution folded onto the list indices, so the
        front of the list is the most likely. The accepted choice moves to the
        end of ``choices``.
        """
        candidates = list(choices)

        while True:
            stddev = len(candidates) / stddev_scaling_factor
            index = int(abs(self.rng.gauss(0.0, stddev)))
            if index >= len(candidates):
                logger.debug("Gaussian draw %d is past %d candidates, redrawing", index, len(candidates))
                continue

            value = candidates[index]
            if self.ui.should_display_table():
                self.ui.display_table(self._gaussian_chance_table(index, candidates, stddev))

            if self.ui.confirm(value):
                break
            logger.debug("Rejected %r", value)
            if len(candidates) > 1:
                candidates.remove(value)
            else:
                self._express_disapproval()
                candidates = list(choices)

        choices.remove(value)
        choices.append(value)
        return value

    def _pick_lru(self, choices: List[str]) -> str:
        """Offer choices from least to most recently used until one is accepted."""
        while True:
            for index, choice in enumerate(choices):
                if self.ui.should_display_table():
                    self.ui.display_table(self._lru_table(index, choices))

                if self.ui.confirm(choice):
                    del choices[index]
                    choices.append(choice)
                    return choice
                logger.debug("Rejected %r", choice)
            self._express_disapproval()

    def _pick_weighted_common(self, initialize_candidates: Callable[[], List[Candidate]]) -> int:
        """
        The weighted consent loop shared by the even, weighted, inventory and
        lottery models.

        ``initialize_candidates`` returns the full pool of eligible candidates.
        Rejected candidates leave the pool, which renormalizes the chances of
        the rest. Once the last one is rejected the pool is rebuilt. Returns
        the original index of the accepted candidate.
        """
        candidates = initialize_candidates()

        while True:
            chosen = self._draw_weighted(candidates)
            logger.debug("Drew %r from %d candidates", chosen.name, len(candidates))

            if self.ui.should_display_table():
                self.ui.display_table(self._weighted_chance_table(chosen, candidates))

            if self.ui.confirm(chosen.name):
                return chosen.index
            logger.debug("Rejected %r", chosen.name)
            if len(candidates) > 1:
                del candidates[[c.name for c in candidates].index(chosen.name)]
            else:
                self._express_disapproval()
                candidates = initialize_candidates()

    def _draw_weighted(self, candidates: List[Candidate]) -> Candidate:
        # One randrange call per draw keeps seeded sequences reproducible.
        cumulative = list(itertools.accumulate(c.weight for c in candidates))
        point = self.rng.randrange(cumulative[-1])
        return candidates[bisect.bisect_right(cumulative, point)]

    # ---------- Tables ----------

    def _weighted_chance_table(self, chosen: Candidate, candidates: List[Candidate]) -> Table:
        total = sum(c.weight for c in candidates)
        rows = []
        for candidate in sorted(candidates, key=lambda c: c.weight):
            chance = candidate.weight / total * 100
            cells: List[Cell] = [candidate.name, candidate.weight, chance]
            rows.append(Row(cells=cells, chosen=candidate.index == chosen.index))
        return Table(
            header=["Name", "Weight", "Chance"],
            rows=rows,
            footer=["Total", total, 100.0],
        )

    def _gaussian_chance_table(self, index: int, candidates: List[str], stddev: float) -> Table:
        distribution = NormalDist(0.0, stddev)
        rows = []
        total_chance = 0.0
        for i, candidate in enumerate(candidates):
            # Both tails fold onto the same index, hence 2 * 100.
            chance = (distribution.cdf(i + 1) - distribution.cdf(i)) * 200
            total_chance += chance
            rows.append(Row(cells=[candidate, chance], chosen=i == index))
        return Table(header=["Name", "Chance"], rows=rows, footer=["Total", total_chance])

    def _lru_table(self, index: int, candidates: List[str]) -> Table:
        remaining = candidates[index:]
        rows = [
            Row(cells=[candidate], chosen=i == len(remaining) - 1)
            for i, candidate in enumerate(reversed(remaining))
        ]
        return Table(header=["Name"], rows=rows, footer=[])


__all__ = [
    "CategoryNotFound",
    "ChoosyError",
    "DISAPPROVAL",
    "EmptyCategory",
    "Engine",
    "RandomSource",
]
