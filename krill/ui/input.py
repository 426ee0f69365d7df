"""
Input handling for the krill text editor.

Routes each input character according to the current mode (normal, insert,
command) and resolves pending normal-mode key sequences against the buffer's
own bindings and the global keymaps.
"""
import string

from krill import commands, logger
from krill.keymaps import NORMAL_KEYMAPS

ESCAPE = "\x1b"
BACKSPACES = ("\b", "\x7f")
SUBMIT = ("\r", "\n")

def send_input(context, char: str):
    """Feed one input character to the editor."""
    if context.mode == "normal":
        handle_normal_mode(context, char)
    elif context.mode == "insert":
        handle_insert_mode(context, char)
    elif context.mode == "command":
        handle_command_mode(context, char)
    else:
        raise RuntimeError(f"Unknown mode: {context.mode!r}")

def handle_normal_mode(context, char: str):
    """Handle a key press in normal mode."""
    # ESC cancels partial input
    if char == ESCAPE:
        context.key_stack = []
        return
    if char == ":":
        context.mode = "command"
        return
    context.key_stack.append(char)
    try_call_keymapping(context)

def handle_insert_mode(context, char: str):
    """Handle a key press in insert mode."""
    if char == ESCAPE:
        context.mode = "normal"
        return
    buf = context.current_buffer
    if char in BACKSPACES:
        context.cursor = buf.backspace(context.cursor)
        return
    context.cursor = buf.insert(char, context.cursor)

def handle_command_mode(context, char: str):
    """Handle a key press in command (:) mode."""
    if char == ESCAPE:
        context.mode = "normal"
        context.command_buffer = ""
        return
    if char in SUBMIT:
        commands.process_command(context, context.command_buffer)
        context.command_buffer = ""
        context.mode = "normal"
        return
    if char in BACKSPACES:
        if not context.command_buffer:
            context.mode = "normal"
            return
        context.command_buffer = context.command_buffer[:-1]
        return
    context.command_buffer += char

def split_count(keys: list) -> tuple:
    """
    Split pending keys into (count, remaining keys). A leading run of digits is
    the repeat count, except that a sequence starting with "0" has no count.
    """
    digits = 0
    while digits < len(keys) and keys[digits] in string.digits:
        digits += 1
    if digits == 0 or keys[0] == "0":
        return 1, keys
    return int("".join(keys[:digits])), keys[digits:]

def run_binding(context, mapping, count: int):
    """Invoke a binding; a failing action is logged and shown in a popup."""
    try:
        mapping(context, count)
    except Exception as e:
        label = mapping.title or mapping.key
        logger.log(f"binding '{label}' failed: {e!r}")
        context.log_command(f"{label}: {type(e).__name__}")
        commands.open_result_popup(context, label, commands.error_lines(e))

def try_call_keymapping(context):
    """Run the binding matching the pending keys, or decide whether to keep waiting."""
    count, keys = split_count(context.key_stack)
    key_seq = "".join(keys)
    local = context.current_buffer.keymaps

    mapping = local.get(key_seq) or NORMAL_KEYMAPS.get(key_seq)
    if mapping:
        context.key_stack = []
        run_binding(context, mapping, count)
        return

    # reset the key stack if it is longer than any known mapping
    known = list(local) + list(NORMAL_KEYMAPS)
    if not any(len(key) >= len(key_seq) for key in known):
        context.key_stack = []
