import sys
from pathlib import Path
from dataclasses import dataclass, field

try:
    import typer
except ImportError:
    print("You need to install typer to run safeseq CLI. Please run `pip install typer`.", file=sys.stderr)
    raise SystemExit(1)

from ..core.config import SafeSeqConfig

__all__ = ["app", "app_state"]

app = typer.Typer(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
)


@dataclass(slots=True)
class AppState:
    """
    Application state variables
    """
    config: SafeSeqConfig = field(default_factory=SafeSeqConfig)
    config_path: Path | None = None


app_state = AppState()
