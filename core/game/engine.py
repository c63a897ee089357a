"""Shared blackjack table engine with state machine."""

from random import Random
from typing import Any, Callable

from loguru import logger
from transitions import Machine

from config import TableConfig
from core.cards import Card, Shoe
from core.dealer import play_dealer_hand
from core.hand import Hand
from core.game.errors import IllegalIntent, InvalidWager, TableError
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.intents import Intent, IntentKind
from core.game.messages import Dispatcher, ErrorNotice, Joined, MessageLog, StateUpdate
from core.game.registry import SessionRegistry
from core.game.settlement import Settlement, settle
from core.game.state import TablePhase
from core.game.table import Player, Table, all_players_locked, everyone_ready
from core.game.view import TableView, player_record, project


class TableGame:
    """
    One shared blackjack table driven by a state machine.

    Every intent runs to completion inside ``handle``: the table is
    validated, mutated, and every observer is sent a fresh projection before
    the call returns. Rejected intents leave the table untouched and are
    answered only to the session that sent them.
    """

    # State machine states
    STATES = [phase.name.lower() for phase in TablePhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "begin_deal", "source": "waiting", "dest": "dealing"},
        {"trigger": "open_action", "source": "dealing", "dest": "players_act"},
        # Straight from dealing when every player has a natural
        {"trigger": "reveal_dealer", "source": ["dealing", "players_act"], "dest": "dealer_turn"},
        {"trigger": "conclude_round", "source": "dealer_turn", "dest": "settling"},
        {"trigger": "reopen_table", "source": "settling", "dest": "waiting"},
        {"trigger": "clear_table", "source": "*", "dest": "waiting"},
    ]

    def __init__(
        self,
        rules: TableConfig | None = None,
        dispatcher: Dispatcher | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize an empty table.

        Args:
            rules: Seating limits and house rules (uses defaults if not provided)
            dispatcher: Delivers outbound messages (records them if not provided)
            rng: Random number generator for reproducible shuffles
        """
        self.rules = rules or TableConfig()
        self.table = Table()
        self.registry = SessionRegistry(self.table, self.rules)
        self.dispatcher = dispatcher or MessageLog()
        self.events = EventEmitter(history_limit=self.rules.event_history_limit)
        self._rng = rng or Random()

        self._handlers: dict[IntentKind, Callable[[str, Any], object]] = {
            IntentKind.JOIN: lambda sid, i: self.join(sid, i.name, i.bankroll, i.bet),
            IntentKind.READY: lambda sid, i: self.ready(sid),
            IntentKind.SET_BET: lambda sid, i: self.set_bet(sid, i.value),
            IntentKind.SET_BANKROLL: lambda sid, i: self.set_bankroll(sid, i.value),
            IntentKind.ALL_IN: lambda sid, i: self.all_in(sid),
            IntentKind.HIT: lambda sid, i: self.hit(sid),
            IntentKind.STAND: lambda sid, i: self.stand(sid),
            IntentKind.NEW_ROUND: lambda sid, i: self.new_round(sid),
            IntentKind.LEAVE: lambda sid, i: self.leave(sid),
        }

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting",
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_sync_phase",
        )

    @property
    def phase(self) -> TablePhase:
        """Get current table phase as enum."""
        return TablePhase[self._machine_state.upper()]  # type: ignore

    def _sync_phase(self) -> None:
        self.table.phase = self.phase
        logger.debug("Table phase is now {}", self.table.phase)

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to table events."""
        self.events.subscribe(handler, event_type)

    # ------------------------------------------------------------------
    # Entry point

    def handle(self, session_id: str, intent: Intent) -> bool:
        """
        Apply one intent from one session.

        Returns:
            True if the intent was accepted, False if it was rejected
        """
        try:
            self._handlers[intent.kind](session_id, intent)
        except TableError as exc:
            self.reject(session_id, exc)
            return False
        return True

    def reject(self, session_id: str, error: TableError) -> None:
        """Tell one session its intent was refused."""
        logger.info("Rejected intent from {}: {} ({})", session_id, error.kind, error.message)
        self.events.emit_new(
            EventType.INTENT_REJECTED,
            session_id=session_id,
            kind=error.kind,
            message=error.message,
        )
        self.dispatcher.send(session_id, ErrorNotice(kind=error.kind, text=error.message))

    def snapshot(self, observer_id: str | None = None) -> TableView:
        """Return the projection one observer would currently see."""
        return project(self.table, observer_id)

    def send_snapshot(self, session_id: str) -> None:
        """Send the current projection to one session, e.g. on connect."""
        self.dispatcher.send(session_id, StateUpdate(self.snapshot(session_id)))

    # ------------------------------------------------------------------
    # Seating and wagers (waiting phase)

    def join(
        self,
        session_id: str,
        name: str | None = None,
        bankroll: Any = None,
        bet: Any = None,
    ) -> Player:
        """Seat a session and send it its own record."""
        player = self.registry.join(session_id, name, bankroll, bet)
        self.events.emit_new(
            EventType.PLAYER_JOINED,
            session_id=session_id,
            name=player.name,
            bankroll=player.bankroll,
            bet=player.bet,
        )
        self.dispatcher.send(session_id, Joined(player_record(player)))
        self._start_if_everyone_ready()
        return player

    def leave(self, session_id: str) -> Player | None:
        """
        Remove a disconnected session's seat.

        May empty the table, start a round everyone else was ready for, or
        unblock the simultaneous-action phase.
        """
        player = self.registry.leave(session_id)
        if player is None:
            return None

        self.events.emit_new(EventType.PLAYER_LEFT, session_id=session_id, name=player.name)

        if not self.table.players:
            self.clear_table()
            self.events.emit_new(EventType.TABLE_RESET)
            self._broadcast()
        elif self.phase is TablePhase.PLAYERS_ACT:
            self._broadcast()
            self._advance_if_locked()
        elif self.phase is TablePhase.WAITING:
            self._start_if_everyone_ready()
        else:
            self._broadcast()
        return player

    def ready(self, session_id: str) -> None:
        """Mark a player ready; deals the round once everyone is."""
        player = self._require_waiting(session_id, "ready up")
        player.reclamp(self.rules)
        player.ready = True
        self.events.emit_new(EventType.PLAYER_READY, session_id=session_id, bet=player.bet)
        self._start_if_everyone_ready()

    def set_bet(self, session_id: str, value: int) -> None:
        """Change a player's bet; the player must ready up again."""
        player = self._require_waiting(session_id, "change your bet")
        if not _is_whole(value) or not 1 <= value <= player.bankroll:
            raise InvalidWager(
                f"Invalid bet. Enter a whole number between 1 and your bankroll ({player.bankroll})."
            )
        player.bet = value
        self._wager_changed(player)

    def set_bankroll(self, session_id: str, value: int) -> None:
        """Change a player's bankroll, capping the bet to it."""
        player = self._require_waiting(session_id, "change your bankroll")
        limit = self.rules.max_bankroll
        if not _is_whole(value) or not 1 <= value <= limit:
            raise InvalidWager(f"Invalid bankroll. Enter a whole number between 1 and {limit}.")
        player.bankroll = value
        player.bet = min(player.bet, player.bankroll)
        self._wager_changed(player)

    def all_in(self, session_id: str) -> None:
        """Bet the whole bankroll."""
        player = self._require_waiting(session_id, "go all in")
        player.bet = max(1, player.bankroll)
        self._wager_changed(player)

    def _wager_changed(self, player: Player) -> None:
        player.ready = False
        self.events.emit_new(
            EventType.WAGER_CHANGED,
            session_id=player.id,
            bet=player.bet,
            bankroll=player.bankroll,
        )
        self._start_if_everyone_ready()

    def _require_waiting(self, session_id: str, action: str) -> Player:
        if self.phase is not TablePhase.WAITING:
            raise IllegalIntent(f"You can only {action} between rounds.")
        return self.registry.require(session_id)

    # ------------------------------------------------------------------
    # Round flow

    def _start_if_everyone_ready(self) -> None:
        if self.phase is TablePhase.WAITING and everyone_ready(self.table.players, self.rules):
            self._start_round()
        else:
            self._broadcast()

    def _start_round(self) -> None:
        """Build a fresh shoe and deal two cards to everyone, dealer last."""
        table = self.table
        table.round += 1
        self.begin_deal()

        table.shoe = Shoe.build(self.rules.num_decks, rng=self._rng)
        table.dealer.reset()
        for player in table.players:
            player.reset_round()
            player.reclamp(self.rules)

        logger.info("Round {} starting with {} player(s)", table.round, table.seated)
        self.events.emit_new(
            EventType.ROUND_STARTED,
            round=table.round,
            players=[p.id for p in table.players],
        )

        for _ in range(2):
            for player in table.players:
                self._deal_to(player.hand, player.id, face_up=not player.hand.cards)
            self._deal_to(table.dealer.hand, "dealer", face_up=not table.dealer.hand.cards)

        for player in table.players:
            player.blackjack = player.hand.is_blackjack
            if player.blackjack:
                self.events.emit_new(EventType.PLAYER_BLACKJACK, session_id=player.id)

        if table.players and all(p.blackjack for p in table.players):
            self.reveal_dealer()
            self._play_dealer()
        else:
            self.open_action()
            self._broadcast()

    def _deal_to(self, hand: Hand, recipient: str, face_up: bool = True) -> Card | None:
        """Deal one card; an exhausted shoe simply grants nothing."""
        card = self.table.shoe.draw()
        if card is None:
            logger.warning("Shoe exhausted in round {}; no card for {}", self.table.round, recipient)
            return None
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            recipient=recipient,
            card=str(card) if face_up else "??",
        )
        return card

    def hit(self, session_id: str) -> None:
        """Draw a card for the player; over 21 busts and locks them."""
        player = self._require_actor(session_id)
        self._deal_to(player.hand, player.id, face_up=False)
        self.events.emit_new(EventType.PLAYER_HIT, session_id=session_id, cards=len(player.hand))

        if player.hand.is_busted:
            player.busted = True
            player.done = True
            self.events.emit_new(EventType.PLAYER_BUSTS, session_id=session_id)

        self._broadcast()
        self._advance_if_locked()

    def stand(self, session_id: str) -> None:
        """Lock the player's hand as it is."""
        player = self._require_actor(session_id)
        player.standing = True
        player.done = True
        self.events.emit_new(EventType.PLAYER_STAND, session_id=session_id)

        self._broadcast()
        self._advance_if_locked()

    def _require_actor(self, session_id: str) -> Player:
        if self.phase is not TablePhase.PLAYERS_ACT:
            raise IllegalIntent("You can only hit or stand while players are acting.")
        player = self.registry.require(session_id)
        if player.is_locked:
            raise IllegalIntent("You have already finished this round.")
        return player

    def _advance_if_locked(self) -> None:
        if self.phase is TablePhase.PLAYERS_ACT and all_players_locked(self.table.players):
            self.reveal_dealer()
            self._play_dealer()

    def _play_dealer(self) -> None:
        """Reveal the hole card, draw to the house policy, then settle."""
        dealer = self.table.dealer
        dealer.tally()
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(dealer.hand.cards[1]) if len(dealer.hand) >= 2 else None,
            total=dealer.total,
        )
        self._broadcast()

        already_held = len(dealer.hand)
        drawn = play_dealer_hand(dealer.hand, self.table.shoe, self.rules.dealer_hits_soft_17)
        for card in dealer.hand.cards[already_held:]:
            self.events.emit_new(EventType.CARD_DEALT, recipient="dealer", card=str(card))
        if drawn:
            self.events.emit_new(EventType.DEALER_HITS, cards=drawn, total=dealer.hand.value)

        dealer.tally()
        if dealer.bust:
            self.events.emit_new(EventType.DEALER_BUSTS, total=dealer.total)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, total=dealer.total)

        self.conclude_round()
        self._settle()

    def _settle(self) -> list[Settlement]:
        results = settle(self.table.players, self.table.dealer.hand, self.rules.blackjack_payout)
        for result in results:
            self.events.emit_new(
                EventType.PLAYER_SETTLED,
                session_id=result.player_id,
                outcome=result.outcome.value,
                delta=result.delta,
            )
        logger.info(
            "Round {} settled: dealer {}{}, {}",
            self.table.round,
            self.table.dealer.total,
            " (bust)" if self.table.dealer.bust else "",
            ", ".join(f"{r.player_id}={r.outcome.value}({r.delta:+d})" for r in results),
        )
        self.events.emit_new(
            EventType.ROUND_SETTLED,
            round=self.table.round,
            dealer_total=self.table.dealer.total,
        )
        self._broadcast()
        return results

    def new_round(self, session_id: str) -> None:
        """Clear the settled round and return everyone to the waiting phase."""
        if self.phase is not TablePhase.SETTLING:
            raise IllegalIntent("A new round can only be started after the showdown.")
        self.registry.require(session_id)

        table = self.table
        table.dealer.reset()
        table.shoe = Shoe()
        for player in table.players:
            player.reset_round()
            player.reclamp(self.rules)
            player.ready = False

        self.reopen_table()
        self.events.emit_new(EventType.ROUND_RESET, round=table.round, by=session_id)
        self._broadcast()

    # ------------------------------------------------------------------
    # Outbound

    def _broadcast(self) -> None:
        """Send the public projection to everyone, then each seat its own view."""
        self.dispatcher.broadcast(StateUpdate(project(self.table)))
        if self.phase is TablePhase.SETTLING:
            return
        for player in self.table.players:
            self.dispatcher.send(player.id, StateUpdate(project(self.table, player.id)))


def _is_whole(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
