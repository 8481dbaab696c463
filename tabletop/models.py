"""Deck model for the tabletop."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List

from .config import TableConfig


logger = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass(slots=True)
class Card:
    """A single physical card lying on the table."""

    identifier: int
    front: str
    back: str
    face_up: bool = False
    position: Point = (0.0, 0.0)
    pending_clicks: int = 0

    @property
    def image(self) -> str:
        """Reference of the face currently showing."""

        return self.front if self.face_up else self.back


class Deck:
    """Ordered collection of cards where list order is the z-order.

    Index 0 is the bottom card and the last entry is drawn on top of
    everything else. The set of cards is fixed once the deck is built.
    """

    def __init__(
        self,
        cards: Iterable[Card],
        config: TableConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or TableConfig()
        self.rng = rng or random.Random()
        self.cards: List[Card] = list(cards)
        self._by_id: dict[int, Card] = {}
        for card in self.cards:
            if card.identifier in self._by_id:
                raise ValueError(f"Duplicate card id: {card.identifier}")
            self._by_id[card.identifier] = card

    @classmethod
    def standard(
        cls,
        faces: Iterable[tuple[str, str]],
        config: TableConfig | None = None,
        rng: random.Random | None = None,
    ) -> "Deck":
        """Build a deck from ``(front, back)`` pairs and deal it face down."""

        cards = [
            Card(identifier=index, front=front, back=back)
            for index, (front, back) in enumerate(faces)
        ]
        deck = cls(cards, config=config, rng=rng)
        deck.shuffle()
        return deck

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._by_id

    def get(self, card_id: int) -> Card | None:
        return self._by_id.get(card_id)

    def ids(self) -> list[int]:
        """Return card ids in z-order, bottom first."""

        return [card.identifier for card in self.cards]

    def index_of(self, card_id: int) -> int:
        """Return the z-index of *card_id* or ``-1`` when it is unknown."""

        for index, card in enumerate(self.cards):
            if card.identifier == card_id:
                return index
        return -1

    def top(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def bring_to_front(self, card_id: int) -> None:
        """Move *card_id* to the end of the sequence so it renders on top."""

        index = self.index_of(card_id)
        if index < 0:
            logger.debug("bring_to_front ignored unknown card %r", card_id)
            return
        self.cards.append(self.cards.pop(index))

    def set_position(self, card_id: int, position: Point) -> None:
        """Move *card_id* to the world-space *position* without clamping."""

        card = self._by_id.get(card_id)
        if card is None:
            logger.debug("set_position ignored unknown card %r", card_id)
            return
        x, y = float(position[0]), float(position[1])
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.debug("set_position ignored non-finite %r for %r", position, card_id)
            return
        card.position = (x, y)

    def register_click(self, card_id: int) -> bool:
        """Count a tap on *card_id*; every second tap flips the card.

        Returns ``True`` when the tap completed a pair and flipped the card.
        The counter is only cleared by a flip or a shuffle, so a drag
        between two taps still lets the second tap flip.
        """

        card = self._by_id.get(card_id)
        if card is None:
            logger.debug("register_click ignored unknown card %r", card_id)
            return False
        card.pending_clicks += 1
        if card.pending_clicks < 2:
            return False
        card.face_up = not card.face_up
        card.pending_clicks = 0
        logger.debug("Flipped card %r face_up=%s", card_id, card.face_up)
        return True

    def flip_all(self) -> None:
        """Toggle every card's face independently."""

        for card in self.cards:
            card.face_up = not card.face_up

    def shuffle(self) -> None:
        """Gather every card face down near the centre in a fresh order."""

        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = self.rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

        origin_x, origin_y = self.config.deal_origin
        jitter = self.config.deal_jitter
        for card in cards:
            card.face_up = False
            card.pending_clicks = 0
            card.position = (
                origin_x + self.rng.uniform(-jitter, jitter),
                origin_y + self.rng.uniform(-jitter, jitter),
            )
        logger.debug("Shuffled %d cards", len(cards))
