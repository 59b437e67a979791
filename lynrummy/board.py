from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from .cards import BoardCard, HandCard, OriginDeck
from .rules import Ruleset
from .scoring import score_for_stacks
from .stack import CardStack, merge_stacks


class SplitResult(str, Enum):
    SUCCESS = "SUCCESS"
    DID_NOTHING = "DID_NOTHING"


@dataclass(frozen=True)
class StackLocation:
    shelf_index: int
    stack_index: int


@dataclass(frozen=True)
class BoardLocation:
    shelf_index: int
    stack_index: int
    card_index: int

    def stack_location(self) -> StackLocation:
        return StackLocation(self.shelf_index, self.stack_index)


@dataclass
class Shelf:
    """A row of stacks. Shelves only organize the board, they carry no rules."""

    card_stacks: List[CardStack]

    def clone(self) -> "Shelf":
        return Shelf([card_stack.clone() for card_stack in self.card_stacks])

    def label(self) -> str:
        if not self.card_stacks:
            return "(empty)"
        return " | ".join(card_stack.label() for card_stack in self.card_stacks)

    def is_last_stack(self, stack_location: StackLocation) -> bool:
        return len(self.card_stacks) - 1 == stack_location.stack_index

    def is_clean(self) -> bool:
        return all(card_stack.is_complete() for card_stack in self.card_stacks)

    def extend_stack_with_card(self, stack_index: int, hand_card: HandCard) -> Optional[int]:
        longer_stack = merge_stacks(self.card_stacks[stack_index], CardStack.from_hand_card(hand_card))
        if longer_stack is None:
            return None
        self.card_stacks[stack_index] = longer_stack
        return longer_stack.size()

    def split_stack(self, stack_index: int, card_index: int) -> SplitResult:
        board_cards = self.card_stacks[stack_index].board_cards
        if len(board_cards) == 1:
            return SplitResult.DID_NOTHING

        # Clicking near either end peels off the short side.
        left_count = card_index
        if left_count + 1 <= len(board_cards) / 2:
            left_count += 1

        halves = [CardStack(board_cards[:left_count]), CardStack(board_cards[left_count:])]
        self.card_stacks[stack_index : stack_index + 1] = halves
        return SplitResult.SUCCESS

    def add_singleton_card(self, hand_card: HandCard) -> None:
        self.card_stacks.append(CardStack.from_hand_card(hand_card))

    @classmethod
    def from_shorthand(cls, shorthand: str, origin_deck: OriginDeck = OriginDeck.DECK_ONE) -> "Shelf":
        if not shorthand.strip():
            return cls([])
        return cls([CardStack.from_shorthand(sig, origin_deck) for sig in shorthand.split(" | ")])


@dataclass
class Board:
    """The common area every player shares.

    Locations handed out by this class are plain coordinates; any mutation
    that adds or removes a stack invalidates them.
    """

    shelves: List[Shelf]

    def clone(self) -> "Board":
        return Board([shelf.clone() for shelf in self.shelves])

    def label(self) -> str:
        return "\n".join(shelf.label() for shelf in self.shelves)

    def is_clean(self) -> bool:
        return all(shelf.is_clean() for shelf in self.shelves)

    def get_cards(self) -> List[BoardCard]:
        return [
            board_card
            for shelf in self.shelves
            for card_stack in shelf.card_stacks
            for board_card in card_stack.board_cards
        ]

    def get_stack_locations(self) -> List[StackLocation]:
        return [
            StackLocation(shelf_index, stack_index)
            for shelf_index, shelf in enumerate(self.shelves)
            for stack_index in range(len(shelf.card_stacks))
        ]

    def get_stack_for(self, stack_location: StackLocation) -> CardStack:
        return self.shelves[stack_location.shelf_index].card_stacks[stack_location.stack_index]

    def get_stacks(self) -> List[CardStack]:
        return [card_stack for shelf in self.shelves for card_stack in shelf.card_stacks]

    def score(self) -> int:
        return score_for_stacks(self.get_stacks())

    def is_last_stack(self, stack_location: StackLocation) -> bool:
        return self.shelves[stack_location.shelf_index].is_last_stack(stack_location)

    def extend_stack_with_card(self, stack_location: StackLocation, hand_card: HandCard) -> Optional[int]:
        shelf = self.shelves[stack_location.shelf_index]
        return shelf.extend_stack_with_card(stack_location.stack_index, hand_card)

    def split_stack(self, board_location: BoardLocation) -> SplitResult:
        shelf = self.shelves[board_location.shelf_index]
        return shelf.split_stack(board_location.stack_index, board_location.card_index)

    def add_singleton_card(self, hand_card: HandCard, shelf_index: int = 0) -> None:
        self.shelves[shelf_index].add_singleton_card(hand_card)

    def move_card_stack_to_end_of_shelf(self, source: StackLocation, new_shelf_index: int) -> None:
        stack = self.shelves[source.shelf_index].card_stacks.pop(source.stack_index)
        self.shelves[new_shelf_index].card_stacks.append(stack)

    def merge_card_stacks(self, source: StackLocation, target: StackLocation) -> Optional[CardStack]:
        """Merge the source stack into the target slot, or return None."""
        if source == target:
            return None

        source_stacks = self.shelves[source.shelf_index].card_stacks
        target_stacks = self.shelves[target.shelf_index].card_stacks

        merged_stack = merge_stacks(source_stacks[source.stack_index], target_stacks[target.stack_index])
        if merged_stack is None:
            return None

        # Removing the source first shifts a later target on the same shelf.
        same_shelf_rightward = (
            source.shelf_index == target.shelf_index and source.stack_index < target.stack_index
        )
        final_index = target.stack_index - 1 if same_shelf_rightward else target.stack_index

        del source_stacks[source.stack_index]
        target_stacks[final_index] = merged_stack
        return merged_stack

    def age_cards(self) -> None:
        for board_card in self.get_cards():
            board_card.age()

    def mergeable_locations_for(self, card_stack: CardStack) -> List[StackLocation]:
        return [
            location
            for location in self.get_stack_locations()
            if self.get_stack_for(location).is_mergeable_with(card_stack)
        ]

    def shelf_indices_for_stack_drag(self, stack_location: StackLocation) -> List[int]:
        result: List[int] = []
        for shelf_index, shelf in enumerate(self.shelves):
            if shelf_index != stack_location.shelf_index or not shelf.is_last_stack(stack_location):
                result.append(shelf_index)
        return result


def board_from_shorthand(lines: Iterable[str], origin_deck: OriginDeck = OriginDeck.DECK_ONE) -> Board:
    return Board([Shelf.from_shorthand(line, origin_deck) for line in lines])


def initial_board(ruleset: Ruleset | None = None) -> Board:
    ruleset = ruleset or Ruleset()
    shelves = [Shelf([])]
    shelves.extend(Shelf.from_shorthand(line) for line in ruleset.initial_layout)
    shelves.extend(Shelf([]) for _ in range(ruleset.trailing_empty_shelves))
    return Board(shelves)
