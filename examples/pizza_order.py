"""Pizza ordering bot - chatmachine patterns in one file.

Shows:
1. Per-conversation data kept on ``session.data``
2. Both ways of requesting a transition (``change_state`` and ``Transition``)
3. A chained transition resolved inside a single turn
4. Global hooks for cross-cutting concerns
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from chatmachine import BaseState, ChatMachine, Session, Transition, hookimpl

SIZES = ("small", "medium", "large")


@dataclass
class Order:
    size: str | None = None
    toppings: list[str] = field(default_factory=list)


class Welcome(BaseState):
    def on_enter(self, session: Session) -> Transition:
        session.data = Order()
        session.add_output("Welcome to the pizza bot!")
        # Nothing to wait for: go straight to the first question.
        return Transition(AskSize())


class AskSize(BaseState):
    def on_enter(self, session: Session) -> None:
        session.add_output(f"What size would you like? ({', '.join(SIZES)})")

    def on_update(self, session: Session) -> None:
        size = session.input.strip().lower()
        if size not in SIZES:
            session.add_output(f"Sorry, '{size}' is not a size we make.")
            return
        session.data.size = size
        session.change_state(AskToppings())


class AskToppings(BaseState):
    def on_enter(self, session: Session) -> None:
        session.add_output("Add toppings one per message, or say 'done'.")

    def on_update(self, session: Session) -> Transition | None:
        text = session.input.strip().lower()
        if text == "done":
            return Transition(Confirm())
        session.data.toppings.append(text)
        session.add_output(f"Added {text}.")
        return None


class Confirm(BaseState):
    def on_enter(self, session: Session) -> None:
        order: Order = session.data
        toppings = ", ".join(order.toppings) or "no toppings"
        session.add_output(f"A {order.size} pizza with {toppings}. Place the order? (yes/no)")

    def on_update(self, session: Session) -> None:
        if session.input.strip().lower() == "yes":
            session.add_output("Order placed. Bye!")
            session.end()
            return
        session.change_state(Welcome())

    def on_exit(self, session: Session) -> None:
        session.add_output("Let's start over.")


class TurnCounter:
    """Counts state callbacks across all sessions."""

    def __init__(self) -> None:
        self.updates = 0

    @hookimpl
    def on_update(self, session: Session) -> None:
        self.updates += 1


def main() -> None:
    machine = ChatMachine(Welcome())
    counter = TurnCounter()
    machine.register_plugin(counter, name="counter")
    machine.set_on_enter_hook(lambda session: logger.info("enter session={}", session.session_id))

    for text in ["hi", "huge", "large", "olives", "basil", "done", "yes"]:
        print(f"> {text}")
        print(machine.run(text, "example"), end="")

    print(f"updates={counter.updates} live_sessions={len(machine)}")


if __name__ == "__main__":
    main()
