"""Clone run state machine using transitions library.

Tracks which stage of the clone the orchestrator is in, so a failure can be
reported as "<stage> failed". Stages only move forward; optional stages
(reset, submodules, export) are skipped by triggering the next one directly.

Usage:
    from gitclone.workflow.fsm import CloneFSM

    fsm = CloneFSM()
    fsm.inspect()
    fsm.prepare()
    fsm.checkout()
    fsm.finish()
"""

import logging
from typing import Callable

from transitions import Machine

logger = logging.getLogger(__name__)


STATES = [
    "pending",
    "inspecting",
    "resetting",
    "preparing",
    "checking_out",
    "merging",
    "updating_submodules",
    "exporting",
    "done",
    "failed",
]

TERMINAL_STATES = {"done", "failed"}

# Each trigger becomes a method on the FSM
TRANSITIONS = [
    {"trigger": "inspect", "source": "pending", "dest": "inspecting"},

    # Reset only happens for a reused clone
    {"trigger": "reset", "source": "inspecting", "dest": "resetting"},
    {"trigger": "prepare", "source": ["inspecting", "resetting"], "dest": "preparing"},

    # Plain ref checkout or PR merge, never both
    {"trigger": "checkout", "source": "preparing", "dest": "checking_out"},
    {"trigger": "merge", "source": "preparing", "dest": "merging"},

    {"trigger": "update_submodules", "source": ["checking_out", "merging"],
     "dest": "updating_submodules"},
    {"trigger": "export", "source": ["checking_out", "merging", "updating_submodules"],
     "dest": "exporting"},
    {"trigger": "finish", "source": ["preparing", "checking_out", "merging", "updating_submodules", "exporting"],
     "dest": "done"},

    # Any running stage can fail
    {"trigger": "fail", "source": [s for s in STATES if s not in TERMINAL_STATES], "dest": "failed"},
]


class CloneFSM:
    """State machine for one clone run.

    Wraps the transitions library with run-specific logic:
    - Remembers the stage a failure happened in
    - Logs all transitions
    """

    def __init__(self, on_transition: Callable[[str, str, str], None] | None = None):
        """Initialize FSM in the pending state.

        Args:
            on_transition: Optional callback(from_state, to_state, trigger) called after transitions
        """
        self.on_transition = on_transition
        self.failed_stage: str | None = None

        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="pending",
            auto_transitions=False,  # Only explicit transitions
            send_event=True,  # Pass EventData to callbacks
            after_state_change="on_state_change",
        )

    def on_state_change(self, event) -> None:
        """Callback after any state transition."""
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name

        if to_state == "failed":
            self.failed_stage = from_state

        logger.debug(f"[FSM] {from_state} -> {to_state} ({trigger})")

        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def can(self, trigger: str) -> bool:
        """Check if a trigger can be executed in current state."""
        return trigger in self.machine.get_triggers(self.state)
