# ucima

A compact game engine core. It provides the pieces a game loop needs and
lets a game plug in its own behaviour:

- `ucima.logger`: coloured console logging (`log_message` with a `LogLevel`,
  `trace_info`, `trace_warn`, `trace_error`, `trace_debug`), assertions
  (`uassert`, raising `AssertionFailure`) and `clamp`. `trace_debug` only
  writes when the `UCIMA_DEBUG` environment variable is set to something
  other than empty or `0`.
- `ucima.memory`: `MemoryTracker` accounts allocations per `MemoryCategory`
  and builds a usage report (`usage_report`, amounts formatted by
  `format_amount`).
- `ucima.darray`: `DArray`, a growable array whose capacity doubles when it
  is full, optionally accounted in a `MemoryTracker`.
- `ucima.clock`: `Clock` measures time elapsed since `start`.
- `ucima.event`: `EventSystem` with `register`, `unregister` and `fire`,
  keyed by `EventCode`, carrying a 16-byte `EventContext` payload.
- `ucima.input`: `InputSystem` tracks keyboard (`Keys`) and mouse
  (`MouseButton`) state for the current and previous frame and fires events
  on changes.
- `ucima.renderer`: `Renderer` front end over a `RendererBackend`; backends
  can be registered per `RendererBackendType` with `register_backend` and
  built with `create_backend`.
- `ucima.vk_result`: `VkResult` codes with `result_to_string` and
  `result_is_success`.
- `ucima.platform`: `Platform`, a pygame window and event pump, plus
  `translate_key_code` (X11 keysym to `Keys`), `get_clock_time`, `sleep_ms`,
  `write_console` and `write_console_error`.
- `ucima.application`: `Application` drives the loop for a `Game`
  configured by `AppConfig`; `run_game` is the one-call entry point and
  returns an exit code.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Writing a game

Subclass `Game`, fill in its `AppConfig`, and hand it to `run_game`:

```python
from ucima.application import AppConfig, Game, run_game


class MyGame(Game):
    def initialize(self):
        return True

    def update(self, delta_time):
        return True

    def render(self, delta_time):
        return True

    def on_resize(self, width, height):
        pass


game = MyGame(AppConfig(start_pos_x=960, start_pos_y=540,
                        start_width=900, start_height=800,
                        name="My game"))
exit_code = run_game(game)
```

If `initialize` returns false, the application is not created and
`run_game` returns 1. If `update` or `render` returns false, the loop stops
and the subsystems are shut down. Closing the window also ends the loop.
When the window is resized to zero width or height the application is
suspended until it gets a non-zero size again.

## Listening for events

```python
from ucima.event import EventCode, EventContext, EventSystem

events = EventSystem()

def on_key(code, sender, listener, context):
    print("key", context.get("u16", 0))
    return False

events.register(EventCode.KEY_PRESSED, None, on_key)

context = EventContext()
context.set("u16", 0, 0x41)
events.fire(EventCode.KEY_PRESSED, None, context)
```

Listeners are called in the order they registered. A callback that returns
true stops the event from reaching later listeners, and `fire` then returns
true. A listener can be registered only once per event code.

## The sample application

A minimal game that opens a 900×800 window and runs an empty loop:

```
ucima-testapp
```

## What it does not do

- No drawing backend is included. The default `RendererBackend` only tracks
  frame begin and end and the framebuffer size, so the window stays blank.
  A real backend has to be supplied, either directly to `Renderer` or through
  `register_backend`.
- The window pump reads key presses, mouse button releases, mouse motion,
  resizes and close requests; key releases and mouse button presses and the
  mouse wheel are not read from the window.
- `MemoryTracker` only counts bytes; it does not manage memory.