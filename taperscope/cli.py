from pathlib import Path
from typing import Optional, Tuple, Callable, Iterator, Sequence
from contextlib import contextmanager

import click
from ruamel.yaml.error import YAMLError

import taperscope
from taperscope.catalog import WindowSpec, list_kinds
from taperscope.config import yaml, evolve_compat, TaperError
from taperscope.spectrum import SpectrumConfig, AxisUnit
from taperscope.util import perr, obj_name
from taperscope.window import Window

OutFile = click.Path(dir_okay=False)


# List of recognized WindowSpec file extensions.
YAML_EXTS = [".yaml", ".yml"]

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@contextmanager
def user_errors() -> Iterator[None]:
    """Report TaperError as a click error (message, exit status 1),
    not a traceback."""
    try:
        yield
    except TaperError as e:
        raise click.ClickException(str(e))


def load_spec(
    window: str,
    size: Optional[int],
    params: Sequence[float],
    periodic: bool,
) -> WindowSpec:
    """
    WINDOW is either a window name (then --size is required),
    or a .yaml file containing a !WindowSpec.
    Command-line options override the file's fields.
    """
    path = Path(window)

    if path.suffix in YAML_EXTS:
        if not path.is_file():
            raise click.ClickException(f"Supplied nonexistent file: {path}")

        try:
            spec = yaml.load(path)
        except YAMLError as e:
            raise click.ClickException(f"{path} is not valid YAML:\n{e}")
        if not isinstance(spec, WindowSpec):
            raise click.ClickException(
                f"{path} contains {obj_name(spec)}, not !WindowSpec"
            )

        changes = {}
        if size is not None:
            changes["n"] = size
        if params:
            changes["params"] = params
        if periodic:
            changes["periodic"] = True
        if changes:
            spec = evolve_compat(spec, **changes)
        return spec

    if size is None:
        raise click.UsageError(f"Must specify --size for window '{window}'")
    return WindowSpec(window, size, params, periodic)


# fmt: off
def spec_options(command: Callable) -> Callable:
    """Arguments shared by every command which builds a window."""
    decorators = [
        click.argument('window'),
        click.option('--size', '-n', type=int, help=
            'Window length in samples (required unless WINDOW is a .yaml file).'),
        click.option('--param', '-p', 'params', type=float, multiple=True, help=
            'Window parameter, repeat once per parameter (see `taperscope list`).'),
        click.option('--periodic', is_flag=True, help=
            'Generate the periodic (DFT-even) window instead of the symmetric one.'),
        click.option('--write', '-w', type=OutFile, help=
            'Also write the window spec to a .yaml file.'),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command
# fmt: on


def _build_window(
    window: str,
    size: Optional[int],
    params: Tuple[float, ...],
    periodic: bool,
    write: Optional[str],
    scfg: Optional[SpectrumConfig] = None,
) -> Window:
    spec = load_spec(window, size, params, periodic)
    if write:
        yaml.dump(spec, Path(write))
        perr(f"Wrote {write}")
    return Window(spec, scfg)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(taperscope.__version__)
def main():
    """Generate and analyze window functions for spectral analysis.

    WINDOW arguments are a window name (see `taperscope list`) or a .yaml
    file written by --write.
    """


@main.command("list")
@click.argument("pattern", default="")
def list_command(pattern: str):
    """List window names containing PATTERN, with their parameters."""
    for info in list_kinds(pattern):
        params = " ".join(info.param_names) or "-"
        periodic = "" if info.periodic else "  (symmetric only)"
        click.echo(f"{info.name:<18}{params}{periodic}")


@main.command()
@spec_options
def samples(window, size, params, periodic, write):
    """Print window samples, one per line."""
    with user_errors():
        w = _build_window(window, size, params, periodic, write)
        for x in w.samples:
            click.echo(f"{x:.17g}")


# fmt: off
@main.command()
@spec_options
@click.option('--bins', type=int, default=SpectrumConfig().min_bins, show_default=True, help=
        'Minimum number of DFT bins (the window is zero-padded).')
@click.option('--centered/--raw', default=True, show_default=True, help=
        'Put zero frequency in the middle, or use raw DFT order.')
@click.option('--unit', type=click.Choice([unit.name for unit in AxisUnit]),
        default=AxisUnit.nyquist.name, show_default=True, help=
        'Frequency axis unit.')
# fmt: on
def response(window, size, params, periodic, write, bins, centered, unit):
    """Print the frequency response: frequency and normalized dB per line."""
    with user_errors():
        scfg = SpectrumConfig(min_bins=bins, centered=centered, unit=unit)
        w = _build_window(window, size, params, periodic, write, scfg)
        for freq, db in zip(w.frequencies, w.response_db):
            click.echo(f"{freq:.10g}\t{db:.10g}")


@main.command()
@spec_options
def info(window, size, params, periodic, write):
    """Print the window spec and its metrics."""
    with user_errors():
        w = _build_window(window, size, params, periodic, write)
        spec = w.spec

        click.echo(f"window:             {spec.kind.name}")
        click.echo(f"size:               {spec.n}")
        if spec.params:
            pairs = zip(spec.info.param_names, spec.params)
            click.echo(
                "params:             " + ", ".join(f"{k}={v:g}" for k, v in pairs)
            )
        click.echo(f"periodic:           {spec.periodic}")

        m = w.metrics
        click.echo(f"enbw:               {m.enbw:.6f} bins")
        click.echo(f"coherent_gain:      {m.coherent_gain:.6f}")
        click.echo(f"processing_gain:    {m.processing_gain:.6f}")
        click.echo(f"scalloping_loss:    {m.scalloping_loss:.6f}")
        click.echo(f"scalloping_loss_db: {m.scalloping_loss_db:.4f} dB")
