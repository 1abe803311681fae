"""CLI interface for agent-kit (``ak``)."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import click

from agent_kit import output
from agent_kit.config import log_level as default_log_level
from agent_kit.config import package_version
from agent_kit.errors import AgentKitError
from agent_kit.validators import contents as contents_validator
from agent_kit.validators import plan as plan_validator
from agent_kit.validators import skill as skill_validator

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"], "max_content_width": 100}

EXAMPLES = """\b
Examples:
  ak init                 Initialize with defaults
  ak init --yes           Skip prompts
  ak doctor               Check installation
  ak help init            Help for init command
  ak help skills          List available skills
"""


def _reports_errors(func):
    """Print library errors as a one-line failure and exit 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (AgentKitError, OSError) as e:
            name = click.get_current_context().info_name
            click.echo(output.error(f"Command failed: {name}"), err=True)
            click.echo(str(e), err=True)
            raise SystemExit(1) from None

    return wrapper


class AkGroup(click.Group):
    """Click group whose usage errors (unknown command or option) exit with 1 instead of 2."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.group(cls=AkGroup, invoke_without_command=True, context_settings=CONTEXT_SETTINGS, epilog=EXAMPLES)
@click.version_option(package_version(), "-v", "--version", message="agent-kit v%(version)s")
@click.option("--log-level", default=None, help="Logging level (default: $AGENT_KIT_LOG_LEVEL or WARNING)")
@click.pass_context
def main(ctx: click.Context, log_level: str | None):
    """agent-kit: manage AI coding agent skills and configuration for a project."""
    logging.basicConfig(
        level=(log_level or default_log_level()).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── init ──


def _format_targets(preset) -> str:
    names = [
        label
        for label, enabled in (
            ("Claude", preset.targets.claude),
            ("Copilot", preset.targets.copilot),
            ("AGENTS.md", preset.targets.agents_md),
        )
        if enabled
    ]
    return ", ".join(names)


def _echo_preset_list() -> None:
    from agent_kit.presets import DEFAULT_PRESET, list_presets

    click.echo()
    click.echo(output.title("Available Presets"))
    click.echo()
    for preset in list_presets():
        label = f" {output.dim('(default)')}" if preset.name == DEFAULT_PRESET else ""
        click.echo(f"  {output.command(preset.name.ljust(12))}{label}")
        click.echo(f"  {output.dim(preset.description)}")
        click.echo(f"  {output.dim(f'Skills: {len(preset.skills)} | Targets: {_format_targets(preset)}')}")
        click.echo()
    click.echo(output.bold("Usage:"))
    click.echo("  $ ak init --preset full")
    click.echo("  $ ak init --preset minimal --yes")
    click.echo("  $ ak init --preset-info claude")


def _echo_preset_details(preset) -> None:
    yes, no = click.style("Yes", fg="green"), output.dim("No")
    d = preset.defaults

    click.echo()
    click.echo(output.title(f"Preset: {preset.name}"))
    click.echo(preset.description)
    click.echo()
    click.echo(output.bold("Skills included:"))
    for name in preset.skills:
        click.echo(f"  {output.success(name)}")
    if preset.commands:
        click.echo()
        click.echo(output.bold("Commands included:"))
        for name in preset.commands:
            click.echo(f"  {output.success('/' + name)}")
    click.echo()
    click.echo(output.bold("Target platforms:"))
    click.echo(f"  Claude Code:     {yes if preset.targets.claude else no}")
    click.echo(f"  GitHub Copilot:  {yes if preset.targets.copilot else no}")
    click.echo(f"  AGENTS.md:       {yes if preset.targets.agents_md else no}")
    click.echo()
    click.echo(output.bold("Default configuration:"))
    click.echo(f"  Review tool:     {d.get('reviewTool', 'native')}")
    if d.get("reviewModel"):
        click.echo(f"  Review model:    {d['reviewModel']}")
    click.echo(f"  Reasoning:       {d.get('reviewReasoning', 'medium')}")
    click.echo(f"  Execution mode:  {d.get('planExecutionMode', 'manual')}")
    if preset.create_dirs:
        click.echo()
        click.echo(output.bold("Directories created:"))
        for rel in preset.create_dirs:
            click.echo(f"  {output.arrow(rel + '/')}")
    click.echo()
    click.echo(output.bold("Usage:"))
    click.echo(f"  $ ak init --preset {preset.name}")


def _unknown_preset(name: str) -> None:
    from agent_kit.presets import list_presets

    click.echo(output.error(f"Unknown preset: {name}"), err=True)
    click.echo("Available presets:", err=True)
    for p in list_presets():
        click.echo(f"  {output.command(p.name.ljust(12))} {p.description}", err=True)
    click.echo(f"Use {output.flag('--list-presets')} for details", err=True)
    raise SystemExit(1)


def _confirm_plan(preset) -> None:
    click.echo()
    click.echo(output.title("agent-kit initialization"))
    click.echo()
    click.echo(f"Selected preset: {output.command(preset.name)}")
    click.echo(output.dim(preset.description))
    click.echo()
    click.echo("This will install:")
    click.echo(f"  {output.info(f'{len(preset.skills)} skills: ' + output.dim(', '.join(preset.skills)))}")
    if preset.commands:
        click.echo(f"  {output.info(f'{len(preset.commands)} commands')}")
    if preset.targets.claude:
        click.echo(f"  {output.success('Claude Code integration')}")
    if preset.targets.copilot:
        click.echo(f"  {output.success('GitHub Copilot integration')}")
    if preset.targets.agents_md:
        click.echo(f"  {output.success('AGENTS.md file')}")
    if preset.create_dirs:
        click.echo(f"  {output.info('Directories: ' + output.dim(', '.join(preset.create_dirs)))}")
    click.echo()
    click.echo(output.dim("Use --yes to skip this confirmation"))
    click.confirm("Proceed?", default=True, abort=True)


@main.command()
@click.option("--preset", "preset_name", default=None, metavar="NAME", help="Use a preset (default: standard)")
@click.option("--list-presets", is_flag=True, help="Show all available presets with details")
@click.option("--preset-info", metavar="NAME", default=None, help="Show detailed info about a specific preset")
@click.option(
    "--preset-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Build a custom preset from a JSON/YAML file (extends, addSkills, removeSkills, ...)",
)
@click.option("-y", "--yes", is_flag=True, help="Accept all defaults without prompting")
@click.option("--force", is_flag=True, help="Reinitialize even if already set up")
@click.option("--local", is_flag=True, help="Read skills from a local content directory instead of GitHub")
@click.option(
    "--content-dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Local content directory for --local (default: $AGENT_KIT_CONTENT_DIR or ./content)",
)
@click.option("--copy-skills", is_flag=True, help="Copy skills into .claude/skills instead of symlinking")
@_reports_errors
def init(
    preset_name: str | None,
    list_presets: bool,
    preset_info: str | None,
    preset_file: str | None,
    yes: bool,
    force: bool,
    local: bool,
    content_dir: str | None,
    copy_skills: bool,
):
    """Initialize agent-kit in your project."""
    from agent_kit.config import content_dir as default_content_dir
    from agent_kit.errors import PresetNotFoundError
    from agent_kit.flows.init import init_project, resolve_preset
    from agent_kit.installer import LinkMode
    from agent_kit.presets import get_preset

    if list_presets:
        _echo_preset_list()
        return

    if preset_info:
        preset = get_preset(preset_info)
        if preset is None:
            _unknown_preset(preset_info)
        _echo_preset_details(preset)
        return

    try:
        preset = resolve_preset(preset_name, preset_file)
    except PresetNotFoundError as e:
        _unknown_preset(e.name)

    if not yes:
        _confirm_plan(preset)

    click.echo()
    click.echo(output.title(f'Initializing with "{preset.name}" preset'))
    click.echo(output.info("Fetching and installing skills..."))
    stats = init_project(
        Path.cwd(),
        preset,
        use_local=local,
        content_path=content_dir or default_content_dir(),
        force=force,
        link_mode=LinkMode.COPY if copy_skills else LinkMode.SYMLINK,
    )

    click.echo(output.success(f"Found {len(stats['skills'])} skills for preset '{preset.name}'"))
    if stats["missing"]:
        click.echo(output.warning(f"Not available from source: {', '.join(stats['missing'])}"))
    for path in stats["files"]:
        click.echo(output.success(f"Created {Path(path).relative_to(Path.cwd().resolve())}"))
    click.echo()
    click.echo(
        output.box(
            "agent-kit initialized!",
            [
                f"Preset: {preset.name}",
                f"Skills: {len(stats['skills'])}",
                "",
                "Next steps:",
                "  ak doctor   - Check installation",
                "  ak help     - See available commands",
            ],
        )
    )


# ── update ──


@main.command()
@click.option("--skills-only", is_flag=True, help="Only update skills")
@click.option("--cli-only", is_flag=True, help="Only update CLI")
@click.option("--check", is_flag=True, help="Check for updates without installing")
@_reports_errors
def update(skills_only: bool, cli_only: bool, check: bool):
    """Update to the latest version."""
    from agent_kit.flows.update import plan_update

    report = plan_update(Path.cwd(), skills_only=skills_only, cli_only=cli_only)

    click.echo()
    click.echo(output.title("Checking for updates..."))
    click.echo()
    click.echo(f"CLI version:      {report['version']}")
    if report["config_version"]:
        click.echo(f"Config version:   {report['config_version']} ({report['source']})")
        installed = ", ".join(report["installed"]) or "none"
        click.echo(f"Installed skills: {installed}")
    else:
        click.echo(output.warning("No .ak/config.json found; run 'ak init' first"))
    click.echo()
    if check:
        click.echo(output.info("Check only: nothing will be changed"))
    click.echo(output.warning("Update command not yet fully implemented"))
    click.echo(output.dim("This will:"))
    for step in report["steps"]:
        click.echo(f"  {output.arrow(step)}")
    click.echo()
    click.echo(f"Until then, run {output.command('ak init --force')} to reinstall skills.")


# ── doctor ──


@main.command()
@_reports_errors
def doctor():
    """Diagnose installation health."""
    from agent_kit.flows.doctor import FAIL, PASS, WARN, run_checks, summarize

    click.echo()
    click.echo(output.title(f"agent-kit v{package_version()}"))
    click.echo()

    results = run_checks(Path.cwd())
    for r in results:
        if r.status == PASS:
            click.echo(output.success(r.message))
        else:
            click.echo(output.warning(r.message) if r.status == WARN else output.error(r.message))
            if r.details:
                click.echo(output.dim(f"  {r.details}"))

    counts = summarize(results)
    click.echo()
    if counts[FAIL]:
        click.echo(output.error(f"{counts[FAIL]} check(s) failed"))
        click.echo(f"Run {output.command('ak init')} to set up agent-kit")
        raise SystemExit(1)
    if counts[WARN]:
        click.echo(output.warning(f"{counts[WARN]} warning(s)"))
    else:
        click.echo(output.success("All checks passed!"))


# ── help / version ──


@main.command("help")
@click.argument("topic", required=False)
@click.pass_context
def help_command(ctx: click.Context, topic: str | None):
    """Show help information (ak help [command|skills])."""
    from agent_kit.presets import SKILL_CATALOGUE

    group_ctx = ctx.parent
    if topic is None:
        click.echo(group_ctx.get_help())
        return

    if topic == "skills":
        click.echo()
        click.echo(output.title("Available Skills"))
        click.echo()
        for name, desc in SKILL_CATALOGUE.items():
            click.echo(f"  {output.command(name.ljust(18))} {desc}")
        click.echo()
        click.echo(output.dim("Skills are automatically invoked by AI agents when relevant."))
        click.echo(output.dim("See https://agentskills.io for more information."))
        return

    cmd = main.get_command(group_ctx, topic)
    if cmd is None:
        click.echo(output.error(f"Unknown topic: {topic}"), err=True)
        click.echo(f"Run {output.command('ak help')} for general help", err=True)
        raise SystemExit(1)
    with click.Context(cmd, info_name=topic, parent=group_ctx) as sub_ctx:
        click.echo(cmd.get_help(sub_ctx))


@main.command()
def version():
    """Show version."""
    click.echo(f"agent-kit v{package_version()}")


# ── validate ──


@main.group()
def validate():
    """Validate plan, skill and CONTENTS.md documents."""


validate.add_command(plan_validator.main, "plan")
validate.add_command(skill_validator.main, "skill")
validate.add_command(contents_validator.main, "contents")


if __name__ == "__main__":
    main()
