"""
krill/plugins.py
──────────────────────────────────────────────────────────────────────────────
Plugin hooks for the krill editor.

• A plugin is an object with any of three optional hooks:
    on_startup()              once, after the editor is built, before the first frame
    on_debug_render(delta)    every tick, seconds since the previous tick
    on_buffer_open(buffer)    whenever a new buffer is created
• `plugin.state` is the EditorContext; hooks may read and change it freely.
• Plugins are not discovered on disk: config names entries of BUILTIN_PLUGINS.
• Hooks run in registration order; a failing hook is logged and skipped.
"""

from __future__ import annotations
import random
import typing as _t

from krill import drawings, logger

# ─────────────────── base class ─────────────────────────
class Plugin:
    name = "plugin"

    def __init__(self) -> None:
        self.state = None

    def on_startup(self) -> None:
        pass

    def on_debug_render(self, delta: float) -> None:
        pass

    def on_buffer_open(self, buffer) -> None:
        pass

    # helper ---------------------------------------------------------------
    def draw(self, row: int, col: int, text: str, color: str = None, background: str = None):
        console = self.state.console
        console.move(row, col)
        console.write(text, color=color, background=background)

# ─────────────────── built-in plugins ───────────────────
class FPSPlugin(Plugin):
    """Frame-rate readout in the top-right corner."""
    name = "fps"

    def on_startup(self):
        self.elapsed = 0.0
        self.frames = 0
        self.display_fps = 0

    def on_debug_render(self, delta):
        self.elapsed += delta
        self.frames += 1
        if self.elapsed > 1:
            self.display_fps = self.frames
            self.frames = 0
            self.elapsed = 0.0

        _rows, cols = self.state.console.winsize()
        display = f" FPS: {self.display_fps} "
        self.draw(0, cols - len(display), display, color="black", background="red")

class PetsPlugin(Plugin):
    """A pet wandering along the bottom row."""
    name = "pets"
    POSSIBLE_PETS = ("🐢", "🐈", "🐕", "🐍")

    def on_startup(self):
        self.pets = []
        self.add_pet()

    def add_pet(self):
        _rows, cols = self.state.console.winsize()
        self.pets.append({"icon": random.choice(self.POSSIBLE_PETS), "location": cols // 2})

    def on_debug_render(self, delta):
        rows, cols = self.state.console.winsize()
        for pet in self.pets:
            if random.randint(0, int(1000 * delta)) == 0:
                move = random.randint(-1, 1)
                # erase the old position
                self.draw(rows - 1, pet["location"], "  ")
                pet["location"] = max(cols // 4, min(pet["location"] + move, cols - 2))
            self.draw(rows - 1, pet["location"], pet["icon"])

class LogoPlugin(Plugin):
    """Puts the krill logo in the bottom-right corner at startup."""
    name = "logo"

    def on_startup(self):
        logo = drawings.Drawing(drawings.KRILL, color="red", right=0, bottom=3)
        self.state.drawings.append(logo)

BUILTIN_PLUGINS: dict[str, _t.Type[Plugin]] = {
    "fps": FPSPlugin,
    "pets": PetsPlugin,
    "logo": LogoPlugin,
}

# ─────────────────── plugin manager ─────────────────────
class PluginManager:
    def __init__(self, plugins: _t.Iterable[Plugin] = ()) -> None:
        self.plugins: list[Plugin] = list(plugins)

    def attach(self, ctx) -> None:
        for plugin in self.plugins:
            plugin.state = ctx

    # ── hook dispatch ────────────────────────────────────
    def startup(self) -> None:
        for plugin in self.plugins:
            self._run(plugin, "on_startup")

    def debug_render(self, delta: float) -> None:
        for plugin in self.plugins:
            self._run(plugin, "on_debug_render", delta)

    def buffer_opened(self, buffer) -> None:
        for plugin in self.plugins:
            self._run(plugin, "on_buffer_open", buffer)

    def _run(self, plugin: Plugin, hook: str, *args) -> None:
        fn = getattr(plugin, hook, None)
        if fn is None:
            return
        try:
            fn(*args)
        except Exception as e:
            logger.log(f"[plugins] {plugin.name}.{hook}: {e}")

def load_plugins(names: _t.Iterable[str]) -> PluginManager:
    """Build a manager holding one instance of each named built-in plugin."""
    plugins = []
    for name in names:
        cls = BUILTIN_PLUGINS.get(name)
        if cls is None:
            logger.log(f"[plugins] unknown plugin '{name}'")
            continue
        plugins.append(cls())
    return PluginManager(plugins)
