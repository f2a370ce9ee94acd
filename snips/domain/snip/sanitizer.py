"""
Terminal escape sequence removal

snips.sh answers with a styled TUI transcript. Colours, underline and cursor
codes have to go before any field can be read from it.
"""
import re

# ESC or CSI, optional private markers, optional numeric params, final byte
ANSI_CODE_PATTERN = re.compile(
    r"[\x1b\x9b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]"
)


def strip_ansi(text: str) -> str:
    """
    Remove every terminal escape sequence from text.

    Deleting one sequence can join an orphan ESC with the text after the next
    one, so substitution repeats until nothing matches. This keeps
    strip_ansi(strip_ansi(x)) == strip_ansi(x).
    """
    while True:
        stripped = ANSI_CODE_PATTERN.sub("", text)
        if stripped == text:
            return stripped
        text = stripped
