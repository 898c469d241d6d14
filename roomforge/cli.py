"""Command-line interface for roomforge.

Usage:
    roomforge run "create cube red" "move object up" -o scene.json
    roomforge shell
    roomforge room bedroom --furnish bed,nightstand -o bedroom.json
    roomforge blueprint plan.png --template apartment -o apartment.json
    roomforge info scene.json
    roomforge export-mesh scene.json scene.glb
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click
import numpy as np
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table
from rich.text import Text

from .commands.executor import COMMAND_SUGGESTIONS, CommandExecutor, suggest_commands
from .commands.parser import CommandParser
from .core.config import RoomforgeConfig
from .core.errors import ModelImportError, RoomforgeError
from .core.models import RoomDimensions, SceneEntity
from .core.vocabulary import PRESET_ROOM_HEIGHT, ROOM_PRESETS, ROOM_TYPES
from .mesh.loader import import_model
from .rooms.blueprint import import_blueprint
from .rooms.builder import RoomBuilder
from .rooms.synthesis import ApartmentSynthesizer, JobStatus, SynthesisProgress
from .rooms.templates import list_templates
from .scene.export import import_scene, load_scene, save_scene
from .scene.session import ModelingSession

console = Console()

POSITIVE = click.FloatRange(min=0, min_open=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich output."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False)],
    )


def _load_config(config_path: str | None) -> RoomforgeConfig:
    if config_path:
        return RoomforgeConfig.from_file(config_path)
    return RoomforgeConfig.default()


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """roomforge - Text-driven 3D room modeling."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = _load_config(config)
    setup_logging(verbose)


def _fmt_vec(v) -> str:
    return f"({v.x:.2f}, {v.y:.2f}, {v.z:.2f})"


def _entity_table(entities: list[SceneEntity], title: str | None = None) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Name")
    table.add_column("Position", style="green")
    table.add_column("Rotation (deg)", style="yellow")
    table.add_column("Scale", style="magenta")
    table.add_column("Color")

    for entity in entities:
        rot = entity.rotation
        table.add_row(
            entity.id,
            entity.kind if not entity.subtype else f"{entity.kind}/{entity.subtype}",
            entity.name or "",
            _fmt_vec(entity.position),
            f"({np.degrees(rot.x):.0f}, {np.degrees(rot.y):.0f}, {np.degrees(rot.z):.0f})",
            _fmt_vec(entity.scale),
            Text(entity.color, style=entity.color if len(entity.color) == 7 else ""),
        )
    return table


def _save(session: ModelingSession, output: str | None) -> None:
    if output:
        save_scene(session.store, output)
        console.print(f"[green]Saved {len(session.store)} objects to {output}[/green]")


@main.command()
@click.argument("commands", nargs=-1, required=True)
@click.option(
    "--input", "-i", "scene_file",
    type=click.Path(exists=True),
    help="Start from an exported scene",
)
@click.option(
    "--model", "-m", "models",
    multiple=True,
    type=click.Path(exists=True),
    help="Import an external model before running commands (repeatable)",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Save the resulting scene to a JSON file",
)
@click.option(
    "--keep-going", "-k",
    is_flag=True,
    help="Continue after a failing command",
)
@click.pass_context
def run(
    ctx: click.Context,
    commands: tuple[str, ...],
    scene_file: str | None,
    models: tuple[str, ...],
    output: str | None,
    keep_going: bool,
) -> None:
    """Execute text commands against a scene.

    COMMANDS: One or more quoted commands, applied in order
    """
    cfg: RoomforgeConfig = ctx.obj["config"]
    session = ModelingSession()
    if scene_file:
        count = import_scene(session.store, load_scene(scene_file))
        console.print(f"[cyan]Loaded {count} objects from {scene_file}[/cyan]")

    for model_path in models:
        try:
            entity = import_model(session, model_path, cfg.imports)
        except ModelImportError as e:
            console.print(f"[bold red]Error: {e}[/bold red]")
            raise click.Abort()
        console.print(f"[cyan]Imported {entity.name} as {entity.id}[/cyan]")

    executor = CommandExecutor(session, CommandParser(cfg.parser))
    failures = 0
    for command in commands:
        try:
            result = executor.execute(command)
            console.print(f"[green]✓[/green] {command} [dim]→ {result.message}[/dim]")
        except RoomforgeError as e:
            failures += 1
            console.print(f"[red]✗[/red] {command} [red]→ {e}[/red]")
            if not keep_going:
                break

    if session.store.objects:
        console.print(_entity_table(session.store.objects, title="Scene"))
    _save(session, output)

    if failures:
        raise click.Abort()


@main.command()
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Save the scene to a JSON file on exit",
)
@click.pass_context
def shell(ctx: click.Context, output: str | None) -> None:
    """Interactive command prompt.

    Type 'help' for example commands, '?text' for suggestions, 'list' to show
    the scene and 'quit' to exit.
    """
    cfg: RoomforgeConfig = ctx.obj["config"]
    session = ModelingSession()
    executor = CommandExecutor(session, CommandParser(cfg.parser))

    console.print("[bold]roomforge shell[/bold] [dim](type 'help' or 'quit')[/dim]")
    while True:
        try:
            line = click.prompt("roomforge", prompt_suffix="> ", default="", show_default=False)
        except (EOFError, click.Abort):
            break

        text = line.strip()
        if not text:
            continue
        if text in ("quit", "exit"):
            break
        if text == "help":
            for suggestion in COMMAND_SUGGESTIONS:
                console.print(f"  {suggestion}")
            continue
        if text.startswith("?"):
            for suggestion in suggest_commands(text[1:]):
                console.print(f"  [dim]{suggestion}[/dim]")
            continue
        if text == "list":
            console.print(_entity_table(session.store.objects))
            continue

        try:
            result = executor.execute(text)
            console.print(f"[green]{result.message}[/green]")
        except RoomforgeError as e:
            console.print(f"[red]{e}[/red]")

    _save(session, output)


@main.command()
@click.argument("room_type", type=click.Choice(ROOM_TYPES))
@click.option("--width", "-W", type=POSITIVE, help="Room width in meters (default: preset)")
@click.option("--length", "-L", type=POSITIVE, help="Room length in meters (default: preset)")
@click.option("--height", "-H", type=POSITIVE, default=PRESET_ROOM_HEIGHT, show_default=True)
@click.option(
    "--furnish", "-f",
    default="",
    help="Comma-separated furniture types to place at random positions",
)
@click.option("--seed", type=int, default=None, help="Random seed for furniture placement")
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Save the scene to a JSON file",
)
@click.pass_context
def room(
    ctx: click.Context,
    room_type: str,
    width: float | None,
    length: float | None,
    height: float,
    furnish: str,
    seed: int | None,
    output: str | None,
) -> None:
    """Build a rectangular room (floor + 4 walls), optionally furnished.

    ROOM_TYPE: Room archetype
    """
    cfg: RoomforgeConfig = ctx.obj["config"]
    session = ModelingSession()
    seed = seed if seed is not None else cfg.synthesis.randomization_seed
    builder = RoomBuilder(session, cfg.room, np.random.default_rng(seed))

    preset_w, preset_l = ROOM_PRESETS[room_type]
    dims = RoomDimensions(
        width=width if width is not None else preset_w,
        length=length if length is not None else preset_l,
        height=height,
    )
    built = builder.build_room(room_type, dims)

    for furniture_type in filter(None, (f.strip() for f in furnish.split(","))):
        builder.add_furniture(built.id, furniture_type, builder.random_position(built))

    console.print(f"\n[bold]{built.name}[/bold] {dims.width:g}m x {dims.length:g}m x {dims.height:g}m\n")
    console.print(_entity_table(session.room_entities(built)))
    _save(session, output)


@main.command()
@click.argument("image_path", type=click.Path(exists=True))
@click.option(
    "--template", "-t",
    default="apartment",
    show_default=True,
    help="Apartment template to synthesize",
)
@click.option(
    "--stage-delay",
    type=float,
    default=None,
    help="Seconds between stages (default: from config)",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Save the synthesized scene to a JSON file",
)
@click.pass_context
def blueprint(
    ctx: click.Context,
    image_path: str,
    template: str,
    stage_delay: float | None,
    output: str | None,
) -> None:
    """Import a blueprint image and synthesize an apartment layout.

    IMAGE_PATH: Blueprint image (PNG, JPEG, GIF, BMP, WEBP or PDF)
    """
    cfg: RoomforgeConfig = ctx.obj["config"]
    if stage_delay is not None:
        cfg = cfg.model_copy(
            update={"synthesis": cfg.synthesis.model_copy(update={"stage_delay_s": stage_delay})}
        )
    session = ModelingSession()

    try:
        plan = import_blueprint(session, image_path)
    except RoomforgeError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise click.Abort()

    console.print(f"\n[bold]Blueprint: {plan.name}[/bold] [dim]({plan.content_type}, {plan.size_bytes:,} bytes)[/dim]\n")

    async def _synthesize() -> JobStatus:
        synthesizer = ApartmentSynthesizer(session, cfg)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Analyzing layout...", total=None)

            def on_stage(p: SynthesisProgress) -> None:
                progress.update(
                    task,
                    total=p.total_stages,
                    completed=p.completed_stages,
                    description=f"{p.label} ({p.created_entities} objects)",
                )

            job = synthesizer.synthesize(template, progress_callback=on_stage)
            progress.update(task, total=job.total_stages, completed=0)
            return await job.wait()

    try:
        status = asyncio.run(_synthesize())
    except RoomforgeError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise click.Abort()

    console.print(f"[green]Synthesis {status.value}: {len(session.store)} objects[/green]")
    console.print(_entity_table(session.store.objects, title=f"Template: {template}"))
    _save(session, output)


@main.command()
def templates() -> None:
    """List apartment templates and room presets."""
    table = Table(title="Apartment Templates")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Description", style="dim")
    for t in list_templates():
        table.add_row(t["id"], t["name"], t["description"])
    console.print(table)

    presets = Table(title="Room Presets")
    presets.add_column("Type", style="cyan")
    presets.add_column("Width (m)", justify="right")
    presets.add_column("Length (m)", justify="right")
    for room_type, (w, l) in ROOM_PRESETS.items():
        presets.add_row(room_type, f"{w:g}", f"{l:g}")
    console.print(presets)


@main.command()
@click.argument("scene_file", type=click.Path(exists=True))
def info(scene_file: str) -> None:
    """Show the objects in an exported scene.

    SCENE_FILE: Path to the scene JSON
    """
    doc = load_scene(scene_file)
    console.print(f"\n[bold]Scene: {Path(scene_file).name}[/bold]")
    console.print(f"[dim]Version {doc.version}, exported {doc.timestamp}[/dim]\n")

    if not doc.objects:
        console.print("[yellow]No objects in scene[/yellow]")
        return

    console.print(_entity_table(doc.objects, title=f"Objects ({len(doc.objects)})"))

    rooms = {e.room for e in doc.objects if e.room}
    if rooms:
        console.print(f"\n[cyan]Rooms referenced:[/cyan] {len(rooms)}")


@main.command("export-mesh")
@click.argument("scene_file", type=click.Path(exists=True))
@click.argument("output_path", type=click.Path())
def export_mesh_cmd(scene_file: str, output_path: str) -> None:
    """Convert an exported scene into a mesh file.

    SCENE_FILE: Path to the scene JSON

    OUTPUT_PATH: Mesh file (.glb, .gltf, .obj, .stl, .ply)
    """
    from .mesh.export import export_mesh

    doc = load_scene(scene_file)
    try:
        path = export_mesh(doc.objects, output_path)
    except ValueError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise click.Abort()
    console.print(f"[green]Wrote {path}[/green]")


if __name__ == "__main__":
    main()
