"""Command-line interface for chromachord.

Provides commands for:
- analyze: Chromagram, chord and scale of one audio window
- info: Show audio file information
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core import (
    DEFAULT_BIN_RADIUS,
    DEFAULT_N_FFT,
    DEFAULT_NUM_HARMONICS,
    DEFAULT_NUM_OCTAVES,
    DEFAULT_REF_FREQ,
    DEFAULT_SR,
    ChromaChordError,
)

app = typer.Typer(
    name="chromachord",
    help="Chord and scale inference from spectral energy",
    rich_markup_mode="markdown",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@app.command()
def analyze(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    offset: float = typer.Option(
        0.0, "--offset", help="Start of the analysis window in seconds"
    ),
    n_fft: int = typer.Option(
        DEFAULT_N_FFT, "--n-fft", help="Window length in samples"
    ),
    sr: int = typer.Option(
        DEFAULT_SR, "--sr", help="Sample rate to resample to"
    ),
    octaves: int = typer.Option(
        DEFAULT_NUM_OCTAVES, "--octaves", help="Octaves summed per pitch class"
    ),
    harmonics: int = typer.Option(
        DEFAULT_NUM_HARMONICS, "--harmonics", help="Harmonics summed per octave"
    ),
    radius: int = typer.Option(
        DEFAULT_BIN_RADIUS, "--radius", help="Search window half-width in bins"
    ),
    ref_freq: float = typer.Option(
        DEFAULT_REF_FREQ, "--ref-freq", help="Frequency of C at the lowest octave (Hz)"
    ),
    top: int = typer.Option(
        5, "--top", help="Number of chord candidates to show"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Detect the chord and scale of one window of an audio file.

    Examples:
        chromachord analyze chord.wav
        chromachord analyze song.wav --offset 12.5 --n-fft 16384
        chromachord analyze chord.wav --octaves 3 --harmonics 3 --json
    """
    from .analysis import ChromagramFactory
    from .inference import ChordDetector, infer_scale
    from .input import AudioLoader
    from .theory import TwelveTone

    _setup_logging(verbose)

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        factory = ChromagramFactory(
            num_octaves=octaves,
            num_harmonics=harmonics,
            bin_radius=radius,
            ref_freq=ref_freq,
        )

        loader = AudioLoader(target_sr=sr)
        audio, sr = loader.load(str(input_file))
        spectrum = loader.spectrum(audio, sr, n_fft=n_fft, offset=offset)

        chromagram = factory.create(spectrum.to_magnitude(), TwelveTone())
        detector = ChordDetector()
        candidates = detector.rank(chromagram, top_n=top)
        chord = detector.detect(chromagram)
        scale = infer_scale(chromagram)
    except (ChromaChordError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        result = {
            "input": str(input_file),
            "offset": offset,
            "n_fft": n_fft,
            "sample_rate": sr,
            "chord": chord.symbol,
            "scale": scale.name,
            "chromagram": {str(p): e for p, e in chromagram.items()},
            "candidates": [
                {"chord": m.chord.symbol, "score": m.score} for m in candidates
            ],
        }
        console.print_json(data=result)
        return

    console.print(f"\n[bold blue]Analyzing: {input_file.name}[/bold blue]")
    console.print(
        f"  Window: {n_fft} samples at {offset:.2f}s "
        f"({sr / n_fft:.2f} Hz/bin)"
    )
    _show_chromagram_table(chromagram)
    _show_candidates_table(candidates)
    console.print(f"\n[green]Chord:[/green] [bold]{chord.symbol}[/bold]")
    console.print(f"[green]Scale:[/green] [bold]{scale.name}[/bold]")


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    sr: Optional[int] = typer.Option(
        None, "--sr", help="Resample to this rate (default: native)"
    ),
):
    """Show information about an audio file."""
    from .input import AudioLoader

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    loader = AudioLoader(target_sr=sr, normalize=False)
    try:
        audio, sr = loader.load(str(input_file))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {loader.get_duration(audio, sr):.2f} seconds")
    console.print(f"  Sample rate: {sr} Hz")
    console.print(f"  Samples: {len(audio):,}")


def _show_chromagram_table(chromagram):
    """Display pitch-class energies in a table."""
    table = Table(title="Chromagram")
    table.add_column("Pitch", style="cyan")
    table.add_column("Energy", style="green")
    table.add_column("Rank", style="magenta")

    ranks = {p: i + 1 for i, p in enumerate(chromagram.top_k(len(chromagram)))}
    for pitch_class, energy in chromagram.items():
        table.add_row(str(pitch_class), f"{energy:.4f}", str(ranks[pitch_class]))

    console.print(table)


def _show_candidates_table(candidates):
    """Display ranked chord candidates in a table."""
    table = Table(title="Chord Candidates")
    table.add_column("Chord", style="cyan")
    table.add_column("Score", style="yellow")

    for match in candidates:
        table.add_row(match.chord.symbol, f"{match.score:.4f}")

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
