"""
Input Handling
===============
Maps terminal keystrokes to logical game actions.

Terminals report key presses but never key releases, so held actions
(thrust, turning) are kept alive by a frame-based hold timer that the
keyboard's auto-repeat refreshes. One-shot actions are queued and handed
out one per tick.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import logging


logger = logging.getLogger(__name__)

# Logical actions
FORWARD = 'forward'
TURN_LEFT = 'turn_left'
TURN_RIGHT = 'turn_right'
FIRE = 'fire'
TOGGLE_PAUSE = 'toggle_pause'
RESTART = 'restart'
QUIT = 'quit'

HELD_ACTIONS = (FORWARD, TURN_LEFT, TURN_RIGHT)

KEY_BINDINGS: Dict[str, str] = {
    'w': FORWARD,
    'a': TURN_LEFT,
    'd': TURN_RIGHT,
    ' ': FIRE,
    'p': TOGGLE_PAUSE,
    'q': QUIT,
}

NAMED_KEY_BINDINGS: Dict[str, str] = {
    'KEY_ENTER': RESTART,
    'KEY_UP': FORWARD,
    'KEY_LEFT': TURN_LEFT,
    'KEY_RIGHT': TURN_RIGHT,
}

# xterm focus reporting (DECSET 1004)
FOCUS_REPORTING_ON = '\x1b[?1004h'
FOCUS_REPORTING_OFF = '\x1b[?1004l'
FOCUS_IN = '\x1b[I'
FOCUS_OUT = '\x1b[O'


@dataclass
class ControlState:
    """
    What the player is doing during one tick.

    ``forward``/``turn_left``/``turn_right`` are held states. ``fire``,
    ``toggle_pause`` and ``restart`` are true only on the tick their key
    went down. ``focus`` is None unless the window focus changed.
    """
    forward: bool = False
    turn_left: bool = False
    turn_right: bool = False
    fire: bool = False
    toggle_pause: bool = False
    restart: bool = False
    focus: Optional[bool] = None


class InputHandler:
    """
    Collects keystrokes between ticks and hands out one ControlState
    per tick via ``snapshot``.
    """

    def __init__(self, hold_duration: int = 12):
        self.hold_duration = hold_duration
        self.keys_held: Dict[str, int] = {}  # action -> ticks remaining

        self._fire_queue = 0
        self._toggle_pause = False
        self._restart = False
        self._quit = False
        self._focus: Optional[bool] = None
        self._escape_buffer = ''

    def process_key(self, key) -> None:
        """Process a single keystroke from blessed's inkey()."""
        if key is None or not key:
            return

        text = str(key)
        if self._match_focus(text):
            return

        action = None
        if key.is_sequence:
            action = NAMED_KEY_BINDINGS.get(key.name)
        elif text in ('\r', '\n'):
            action = RESTART
        else:
            action = KEY_BINDINGS.get(text.lower())

        if action is not None:
            self.press(action)

    def _match_focus(self, text: str) -> bool:
        """
        Recognise focus reports.

        Some terminals deliver ``ESC [ I`` as one keystroke, others as
        a bare escape followed by two characters, so both are handled.
        """
        if text in (FOCUS_IN, FOCUS_OUT):
            self.set_focus(text == FOCUS_IN)
            return True

        if text.startswith('\x1b') and FOCUS_IN.startswith(text):
            self._escape_buffer = text
            return True

        if self._escape_buffer:
            candidate = self._escape_buffer + text
            if candidate in (FOCUS_IN, FOCUS_OUT):
                self._escape_buffer = ''
                self.set_focus(candidate == FOCUS_IN)
                return True
            if FOCUS_IN.startswith(candidate):
                self._escape_buffer = candidate
                return True
            self._escape_buffer = ''
        return False

    def press(self, action: str) -> None:
        """Register a key-down for a logical action."""
        if action in HELD_ACTIONS:
            self.keys_held[action] = self.hold_duration
        elif action == FIRE:
            self._fire_queue += 1
        elif action == TOGGLE_PAUSE:
            self._toggle_pause = not self._toggle_pause
        elif action == RESTART:
            self._restart = True
        elif action == QUIT:
            self._quit = True

    def set_focus(self, focused: bool) -> None:
        logger.debug('focus %s', 'gained' if focused else 'lost')
        self._focus = focused

    def update(self) -> None:
        """Age hold timers (call once per tick)."""
        expired = []
        for action, ticks in self.keys_held.items():
            self.keys_held[action] = ticks - 1
            if self.keys_held[action] <= 0:
                expired.append(action)
        for action in expired:
            del self.keys_held[action]

    def snapshot(self) -> ControlState:
        """Build this tick's ControlState, consuming one-shot actions."""
        state = ControlState(
            forward=FORWARD in self.keys_held,
            turn_left=TURN_LEFT in self.keys_held,
            turn_right=TURN_RIGHT in self.keys_held,
            fire=self._fire_queue > 0,
            toggle_pause=self._toggle_pause,
            restart=self._restart,
            focus=self._focus,
        )
        if self._fire_queue > 0:
            self._fire_queue -= 1
        self._toggle_pause = False
        self._restart = False
        self._focus = None
        self.update()
        return state

    def clear_fire_queue(self) -> None:
        """Forget queued shots (used while the game is not accepting input)."""
        self._fire_queue = 0

    def consume_quit(self) -> bool:
        """Check and consume quit trigger."""
        triggered = self._quit
        self._quit = False
        return triggered
