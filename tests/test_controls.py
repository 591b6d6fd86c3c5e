from asteroid_field.controls import ControlState, InputHandler


def test_held_key_expires_without_repeat(make_key):
    handler = InputHandler(hold_duration=3)
    handler.process_key(make_key('w'))

    held = [handler.snapshot().forward for _ in range(5)]
    assert held == [True, True, True, False, False]


def test_auto_repeat_keeps_key_held(make_key):
    handler = InputHandler(hold_duration=2)
    for _ in range(6):
        handler.process_key(make_key('d'))
        assert handler.snapshot().turn_right


def test_arrow_keys_map_to_movement(make_key):
    handler = InputHandler()
    handler.process_key(make_key('\x1b[A', 'KEY_UP'))
    handler.process_key(make_key('\x1b[D', 'KEY_LEFT'))
    controls = handler.snapshot()
    assert controls.forward and controls.turn_left
    assert not controls.turn_right


def test_each_shot_is_fired_on_its_own_tick(make_key):
    handler = InputHandler()
    handler.process_key(make_key(' '))
    handler.process_key(make_key(' '))

    assert [handler.snapshot().fire for _ in range(3)] == [True, True, False]

    handler.process_key(make_key(' '))
    handler.clear_fire_queue()
    assert not handler.snapshot().fire


def test_pause_and_restart_are_one_shot(make_key):
    handler = InputHandler()
    handler.process_key(make_key('P'))
    handler.process_key(make_key('\n', 'KEY_ENTER'))

    first = handler.snapshot()
    assert first.toggle_pause and first.restart
    second = handler.snapshot()
    assert not second.toggle_pause and not second.restart


def test_carriage_return_restarts(make_key):
    handler = InputHandler()
    handler.process_key(make_key('\r'))
    assert handler.snapshot().restart


def test_focus_reports_in_one_piece(make_key):
    handler = InputHandler()
    handler.process_key(make_key('\x1b[O'))
    assert handler.snapshot().focus is False
    assert handler.snapshot().focus is None

    handler.process_key(make_key('\x1b[I'))
    assert handler.snapshot().focus is True


def test_focus_report_split_across_keystrokes(make_key):
    handler = InputHandler()
    for part in ('\x1b', '[', 'O'):
        handler.process_key(make_key(part))
    controls = handler.snapshot()
    assert controls.focus is False
    assert not controls.toggle_pause


def test_broken_escape_falls_back_to_normal_keys(make_key):
    handler = InputHandler()
    handler.process_key(make_key('\x1b'))
    handler.process_key(make_key('w'))
    controls = handler.snapshot()
    assert controls.forward
    assert controls.focus is None


def test_quit_is_consumed_once(make_key):
    handler = InputHandler()
    handler.process_key(make_key('q'))
    assert handler.consume_quit()
    assert not handler.consume_quit()


def test_unbound_keys_are_ignored(make_key):
    handler = InputHandler()
    handler.process_key(make_key('z'))
    handler.process_key(make_key('', None))
    handler.process_key(None)
    assert handler.snapshot() == ControlState()
