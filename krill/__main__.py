"""
Main entry point and run loop for the krill text editor.
"""
import curses
import locale
import sys
import time

from krill import commands, config, logger, plugins
from krill.editor import EditorContext
from krill.ui import console, screen
from krill.ui import input as key_input

def run_loop(context):
    """
    Poll for one input character per frame. A frame with input gets a full
    redraw; every frame gets the plugin debug overlay.
    """
    interval = context.config.frame_interval
    last_tick = time.monotonic()
    next_frame = last_tick
    while not context.exit_flag:
        next_frame += interval
        now = time.monotonic()
        if next_frame < now:
            next_frame = now
        time.sleep(next_frame - now)

        if context.console.input_available():
            key_input.send_input(context, context.console.read_char())
            screen.display(context)

        now = time.monotonic()
        screen.display_debug(context, now - last_tick)
        last_tick = now

def main(stdscr, argv=None):
    argv = sys.argv[1:] if argv is None else argv
    settings = config.load_config()
    logger.set_log_path(settings.log_file)

    term = console.CursesConsole(stdscr)
    context = EditorContext(term, settings, plugins.load_plugins(settings.plugins))

    # If started with a path argument, try to open it
    if argv:
        path = argv[0]
        try:
            context.open_buffer(path)
        except Exception as e:
            logger.log(f"error opening {path}: {e}")
            commands.open_result_popup(context, path, commands.error_lines(e))

    context.plugin_manager.startup()
    screen.display(context)
    run_loop(context)

def run():
    """
    Simple convenience function to start the curses wrapper with main().
    """
    locale.setlocale(locale.LC_ALL, "")
    curses.wrapper(main)

if __name__ == "__main__":
    run()
