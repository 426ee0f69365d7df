"""Tests for krill.plugins: hook dispatch and the built-in plugins."""
from krill import plugins
from krill.keymaps import Binding
from krill.plugins import (FPSPlugin, LogoPlugin, PetsPlugin, Plugin,
                           PluginManager, load_plugins)


class Recorder(Plugin):
    name = "recorder"

    def __init__(self, calls):
        super().__init__()
        self.calls = calls

    def on_startup(self):
        self.calls.append((self.name, "startup"))

    def on_debug_render(self, delta):
        self.calls.append((self.name, "render", delta))


class Broken(Plugin):
    name = "broken"

    def on_startup(self):
        raise ValueError("boom")

    def on_debug_render(self, delta):
        raise KeyError("frame")


class TestPluginManager:
    def test_hooks_run_in_registration_order(self, make_editor):
        calls = []
        first, second = Recorder(calls), Recorder(calls)
        second.name = "second"
        manager = PluginManager([first, second])
        make_editor(plugin_manager=manager)
        manager.startup()
        manager.debug_render(0.25)
        assert calls == [
            ("recorder", "startup"),
            ("second", "startup"),
            ("recorder", "render", 0.25),
            ("second", "render", 0.25),
        ]

    def test_failing_hook_is_logged_and_skipped(self, make_editor, log_path):
        calls = []
        manager = PluginManager([Broken(), Recorder(calls)])
        make_editor(plugin_manager=manager)
        manager.startup()
        manager.debug_render(0.1)
        assert calls == [("recorder", "startup"), ("recorder", "render", 0.1)]
        text = log_path.read_text(encoding="utf-8")
        assert "[plugins] broken.on_startup: boom" in text
        assert "[plugins] broken.on_debug_render: 'frame'" in text

    def test_plugins_receive_the_context(self, make_editor):
        plugin = Plugin()
        editor = make_editor(plugin_manager=PluginManager([plugin]))
        assert plugin.state is editor

    def test_buffer_hook_can_add_bindings(self, make_editor, press):
        hits = []

        class Marker(Plugin):
            name = "marker"

            def on_buffer_open(self, buffer):
                buffer.keymaps["Q"] = Binding("Q", lambda ctx, n: hits.append(n), "mark")

        editor = make_editor(plugin_manager=PluginManager([Marker()]))
        press(editor, "4Q")
        assert hits == [4]

    def test_draw_helper(self, make_editor):
        plugin = Plugin()
        editor = make_editor(plugin_manager=PluginManager([plugin]))
        plugin.draw(3, 5, "hi", color="green")
        assert editor.console.line(3)[5:7] == "hi"
        assert editor.console.styles[3][5] == ("green", None, False)


class TestLoadPlugins:
    def test_builds_named_plugins(self):
        manager = load_plugins(["fps", "logo"])
        assert [type(p) for p in manager.plugins] == [FPSPlugin, LogoPlugin]

    def test_unknown_names_are_logged(self, log_path):
        manager = load_plugins(["fps", "nope"])
        assert [type(p) for p in manager.plugins] == [FPSPlugin]
        assert "[plugins] unknown plugin 'nope'" in log_path.read_text(encoding="utf-8")

    def test_each_call_builds_fresh_instances(self):
        assert load_plugins(["fps"]).plugins[0] is not load_plugins(["fps"]).plugins[0]


class TestFPSPlugin:
    def test_counts_frames_per_second(self, make_editor):
        editor = make_editor(plugin_manager=load_plugins(["fps"]))
        editor.plugin_manager.startup()
        editor.plugin_manager.debug_render(0.5)
        assert editor.console.line(0)[72:80] == " FPS: 0 "
        editor.plugin_manager.debug_render(0.6)
        assert editor.console.line(0)[72:80] == " FPS: 2 "
        assert editor.console.styles[0][72] == ("black", "red", False)

    def test_follows_terminal_width(self, make_editor):
        editor = make_editor(cols=40, plugin_manager=load_plugins(["fps"]))
        editor.plugin_manager.startup()
        editor.plugin_manager.debug_render(0.1)
        assert editor.console.line(0).endswith(" FPS: 0 ")


class TestLogoPlugin:
    def test_adds_logo_drawing(self, make_editor):
        editor = make_editor(plugin_manager=load_plugins(["logo"]))
        editor.plugin_manager.startup()
        [logo] = editor.drawings
        assert logo.color == "red"
        assert logo.origin(24, 80) == (16, 57)


class TestPetsPlugin:
    def make_pets(self, make_editor, monkeypatch, step):
        monkeypatch.setattr(plugins.random, "choice", lambda options: options[0])
        # first draw decides whether to move (0 = move), second is the step
        monkeypatch.setattr(plugins.random, "randint",
                            lambda low, high: 0 if (low, high) != (-1, 1) else step)
        editor = make_editor(plugin_manager=load_plugins(["pets"]))
        editor.plugin_manager.startup()
        [pets] = editor.plugin_manager.plugins
        return editor, pets

    def test_starts_in_the_middle(self, make_editor, monkeypatch):
        _editor, pets = self.make_pets(make_editor, monkeypatch, 0)
        assert pets.pets == [{"icon": PetsPlugin.POSSIBLE_PETS[0], "location": 40}]

    def test_walks_along_bottom_row(self, make_editor, monkeypatch):
        editor, pets = self.make_pets(make_editor, monkeypatch, -1)
        editor.plugin_manager.debug_render(0.1)
        assert pets.pets[0]["location"] == 39
        assert editor.console.line(23)[39] == PetsPlugin.POSSIBLE_PETS[0]
        assert editor.console.line(23)[40] == " "

    def test_stays_in_bounds(self, make_editor, monkeypatch):
        editor, pets = self.make_pets(make_editor, monkeypatch, -1)
        pets.pets[0]["location"] = 20
        editor.plugin_manager.debug_render(0.1)
        assert pets.pets[0]["location"] == 20
        pets.pets[0]["location"] = 78
        monkeypatch.setattr(plugins.random, "randint",
                            lambda low, high: 0 if (low, high) != (-1, 1) else 1)
        editor.plugin_manager.debug_render(0.1)
        assert pets.pets[0]["location"] == 78
