import enum
import logging
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional, TextIO, Tuple

from .totp import derive_code
from .window import Instant, progress, remaining_seconds

logger = logging.getLogger(__name__)

TICK_SECONDS = 0.25
BAR_WIDTH = 6
# The block is always the code line plus the progress line
BLOCK_LINES = 2

URGENT_SECONDS = 5
WARNING_SECONDS = 10

FULL_CELL = "█"
EMPTY_CELL = "░"
# Index n is a cell filled n/8 from the left
PARTIAL_CELLS = ("", "▏", "▎", "▍", "▌", "▋", "▊", "▉")

# \033[1A moves the cursor up one line, \033[2K clears that line
ERASE_LINE = "\033[1A\033[2K"


@dataclass(frozen=True)
class Palette:
    bold: str = ""
    valid: str = ""
    neutral: str = ""
    urgent: str = ""
    warning: str = ""
    reset: str = ""
    underline: str = ""
    reset_underline: str = ""
    hide_cursor: str = ""
    show_cursor: str = ""


ANSI = Palette(
    bold="\033[1;39m",
    valid="\033[1;92m",
    neutral="\033[0;97m",
    urgent="\033[1;91m",
    warning="\033[1;93m",
    reset="\033[0;39m",
    underline="\033[4m",
    reset_underline="\033[24m",
    hide_cursor="\033[?25l",
    show_cursor="\033[?25h",
)

PLAIN = Palette()


def progress_bar(fraction: float, width: int = BAR_WIDTH) -> str:
    """
    Renders ``fraction`` of ``width`` cells, filled from the left.

    Each cell holds eight fill levels so the bar changes in steps of
    1/(8 * width) rather than whole cells.
    """
    fraction = min(max(fraction, 0.0), 1.0)
    eighths = int(fraction * width * 8)
    full, partial = divmod(eighths, 8)
    bar = FULL_CELL * full
    if full < width:
        bar += PARTIAL_CELLS[partial] if partial else EMPTY_CELL
    return bar + EMPTY_CELL * (width - len(bar))


def urgency_colors(remaining: int, palette: Palette) -> Tuple[str, str]:
    """
    Returns ``(code_color, bar_color)`` for the seconds left in the step.

    The code turns urgent only in the last five seconds; the bar warns
    from ten.
    """
    if remaining <= URGENT_SECONDS:
        return palette.urgent, palette.urgent
    if remaining <= WARNING_SECONDS:
        return palette.valid, palette.warning
    return palette.valid, palette.reset


def render_block(code: str, remaining: int, elapsed: float, palette: Palette = ANSI) -> str:
    """
    The two-line display: the code, then the depleting bar and seconds left.
    """
    code_color, bar_color = urgency_colors(remaining, palette)
    return "{c}{code}{r}\n{b}{bar}{r}  {n}({remaining}s){r}\n".format(
        c=code_color,
        code=code,
        r=palette.reset,
        b=bar_color,
        bar=progress_bar(1 - elapsed),
        n=palette.neutral,
        remaining=remaining,
    )


class State(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class Renderer(object):
    """
    Redraws the current code in place every tick until the process is interrupted.

    Clock, sleep and output are injectable so the loop can run against a
    fake terminal.
    """

    def __init__(
        self,
        secret: bytes,
        palette: Palette = ANSI,
        writer: Optional[TextIO] = None,
        clock: Callable[[], Instant] = time.time,
        monotonic: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        tick: float = TICK_SECONDS,
    ) -> None:
        self.secret = secret
        self.palette = palette
        self.writer = writer if writer is not None else sys.stdout
        self.clock = clock
        self.monotonic = monotonic
        self.sleep = sleep
        self.tick = tick
        self.state = State.IDLE
        self.lines_drawn = 0

    def draw(self) -> None:
        now = self.clock()
        block = render_block(derive_code(self.secret, now), remaining_seconds(now), progress(now), self.palette)
        self.writer.write(ERASE_LINE * self.lines_drawn + block)
        self.writer.flush()
        self.lines_drawn = BLOCK_LINES

    def run(self) -> None:
        """
        Blocks forever; stop it by interrupting the process.
        """
        if self.state is State.RUNNING:
            raise RuntimeError("renderer is already running")
        self.state = State.RUNNING
        logger.debug("Watching TOTP code every %.2fs", self.tick)
        self.writer.write(self.palette.hide_cursor)
        try:
            deadline = self.monotonic()
            while True:
                self.draw()
                # Sleep to the next multiple of the tick so slow draws do not accumulate drift
                deadline += self.tick
                delay = deadline - self.monotonic()
                if delay < 0:
                    deadline = self.monotonic()
                    delay = 0
                self.sleep(delay)
        finally:
            self.writer.write(self.palette.show_cursor)
            self.writer.flush()


def run(secret: bytes, palette: Palette = ANSI, writer: Optional[TextIO] = None) -> None:
    """
    Blocking entry point for the live display of ``secret``'s code.
    """
    Renderer(secret, palette=palette, writer=writer).run()
