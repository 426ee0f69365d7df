"""
Command parsing and execution for the krill text editor.

This module handles command-line mode input (':' mode). A number jumps to that
line; a known verb runs its handler; anything else is handed to the context's
expression evaluator and a non-empty result is shown in a popup. Every failure
is caught here and reported in a popup so the editor keeps running.
"""
import builtins

from krill import drawings, logger
from krill.buffer import Buffer, EditorError
from krill.keymaps import Binding

SAFE_BUILTINS = {
    name: getattr(builtins, name)
    for name in (
        "abs", "all", "any", "bool", "dict", "enumerate", "filter", "float",
        "int", "len", "list", "map", "max", "min", "range", "repr", "reversed",
        "round", "set", "sorted", "str", "sum", "tuple", "zip",
    )
}

def python_evaluator(expression: str, context, buf=None, win=None):
    """
    Evaluate `expression` as a Python expression with `ctx`, `buf` and `win`
    bound to the editor context, a buffer and a window (the active ones when
    not given).
    """
    namespace = {
        "ctx": context,
        "buf": buf if buf is not None else context.current_buffer,
        "win": win if win is not None else context.current_window,
    }
    return eval(expression, {"__builtins__": SAFE_BUILTINS}, namespace)

def result_lines(result) -> list:
    """Turn an evaluation result into popup lines (empty list = nothing to show)."""
    if result is None:
        return []
    if isinstance(result, str):
        return result.splitlines()
    if isinstance(result, dict):
        return [f"{key!r}: {value!r}" for key, value in result.items()]
    if isinstance(result, (list, tuple, set)):
        return [item if isinstance(item, str) else repr(item) for item in result]
    return repr(result).splitlines()

def evaluate(context, expression: str, buf=None, win=None) -> list:
    if context.evaluator is None:
        raise EditorError(f"Not an editor command: {expression}")
    return result_lines(context.evaluator(expression, context, buf, win))

def error_lines(error: Exception) -> list:
    return [f"{type(error).__name__}: {error}"]

# ───────────────────────── popups ───────────────────────────
def close_popup(ctx, _n):
    ctx.close_active_window()

def open_result_popup(context, label: str, lines: list, producer=None):
    """
    Open a read-only popup titled `label`. `q` closes it; when `producer` is
    given, `r` replaces the contents with `producer(context)`.
    """
    buf = Buffer(lines=lines, name=label, read_only=True)
    buf.keymaps["q"] = Binding("q", close_popup, "close")
    if producer is not None:
        def refresh(ctx, _n):
            try:
                buf.lines = producer(ctx)
            except Exception as e:
                logger.log(f"refresh '{label}' failed: {e!r}")
                buf.lines = error_lines(e)
            ctx.cursor = ctx.cursor
        buf.keymaps["r"] = Binding("r", refresh, "refresh")
    return context.open_popup(buf)

# ───────────────────────── verbs ────────────────────────────
def cmd_quit(context, _arg):
    if context.close_active_window():
        return
    context.log_command("q: quit")
    context.graceful_exit()

def cmd_edit(context, path):
    if path:
        context.open_buffer(path)
    else:
        context.reload_buffer()

def cmd_write(context, _arg):
    context.save_buffer()

def cmd_write_quit(context, _arg):
    context.save_buffer()
    context.graceful_exit()

def cmd_debug(context, _arg):
    open_result_popup(context, "dbg", context.dump_state(), lambda ctx: ctx.dump_state())

def cmd_fun(context, _arg):
    if context.drawings:
        context.drawings.clear()
        context.log_command("fun: off")
        return
    context.drawings.extend(drawings.fun_drawings())
    context.log_command("fun: on")

VERBS = {
    "q": cmd_quit,
    "e": cmd_edit,
    "w": cmd_write,
    "wq": cmd_write_quit,
    "dbg": cmd_debug,
    "fun": cmd_fun,
}
# Verbs that accept an argument; the others only match when typed alone
TAKES_ARGUMENT = {"e"}

def run_expression(context, text: str):
    # refreshes see the buffer and window the expression was first run against
    buf, win = context.current_buffer, context.current_window
    lines = evaluate(context, text, buf, win)
    if lines:
        open_result_popup(context, text, lines, lambda ctx: evaluate(ctx, text, buf, win))

def process_command(context, command: str):
    """Parse and execute a command-line (':' mode) command string."""
    cmd = command.strip()
    if not cmd:
        return
    try:
        try:
            line_number = int(cmd)
        except ValueError:
            line_number = None
        if line_number is not None:
            context.goto_line(line_number)
            return

        verb, _, arg = cmd.partition(" ")
        arg = arg.strip()
        handler = VERBS.get(verb)
        if handler is not None and (not arg or verb in TAKES_ARGUMENT):
            handler(context, arg)
            return
        run_expression(context, cmd)
    except Exception as e:
        logger.log(f"command '{cmd}' failed: {e!r}")
        context.log_command(f"{cmd}: {type(e).__name__}")
        open_result_popup(context, cmd, error_lines(e))
