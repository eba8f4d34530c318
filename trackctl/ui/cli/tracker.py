"""
CLI commands ``track`` and ``untrack``.

Thin wrappers over ``trackctl.core.use_cases.track``. Both commands
share one implementation and differ only by the operation they apply.
"""

from __future__ import annotations

import sys

import click

from trackctl.adapters.base import SessionControl
from trackctl.core.config.loader import ConfigError, TrackctlConfig, load_config
from trackctl.core.models.tracker import ALL_PIDS, ExitCode, TrackerOperation, TrackerOptions

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_HELP = """\
{summary}

If no session is given (-s), the command applies to the current
session. Exactly one domain (-k or -u) must be specified.

\b
Examples:
    trackctl {name} -k -p 42,1337
    trackctl {name} -u -s my-session -p --all
"""

_SUMMARY = {
    TrackerOperation.TRACK: "Add PIDs to the process tracker of a tracing session.",
    TrackerOperation.UNTRACK: "Remove PIDs from the process tracker of a tracing session.",
}

_PAST_TENSE = {
    TrackerOperation.TRACK: "tracked",
    TrackerOperation.UNTRACK: "untracked",
}


def _list_options(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Print one option name per line and exit."""
    if not value or ctx.resilient_parsing:
        return
    for p in ctx.command.get_params(ctx):
        for opt in sorted(p.opts + p.secondary_opts, key=lambda o: not o.startswith("--")):
            click.echo(opt)
    ctx.exit()


def _resolve_control(ctx: click.Context, config: TrackctlConfig) -> SessionControl:
    """Backend injected by the caller, else the configured one."""
    injected = ctx.obj.get("session_control")
    if injected is not None:
        return injected

    from trackctl.core.use_cases.track import default_registry

    registry = default_registry(config, mock_mode=ctx.obj.get("mock", False))
    control = registry.get(config.backend)
    assert control is not None  # every configurable backend is registered
    return control


def _tracker_command(operation: TrackerOperation) -> click.Command:
    name = str(operation)

    @click.command(
        name=name,
        context_settings=CONTEXT_SETTINGS,
        help=_HELP.format(summary=_SUMMARY[operation], name=name),
    )
    @click.option(
        "--list-options",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_list_options,
        help="Simple listing of options.",
    )
    @click.option("--session", "-s", "session_name", default=None, metavar="NAME",
                  help="Apply to session name.")
    @click.option("--kernel", "-k", is_flag=True, help="Apply to the kernel tracer.")
    @click.option("--userspace", "-u", is_flag=True, help="Apply to the user-space tracer.")
    @click.option(
        "--pid",
        "-p",
        "pid_string",
        is_flag=False,
        flag_value="",
        default=None,
        metavar="[PIDLIST]",
        help="Process ID tracker. Leave PIDLIST empty when used with --all.",
    )
    @click.option("--all", "-a", "all_pids", is_flag=True, help="All PIDs (use with --pid).")
    @click.pass_context
    def command(
        ctx: click.Context,
        session_name: str | None,
        kernel: bool,
        userspace: bool,
        pid_string: str | None,
        all_pids: bool,
    ) -> None:
        from trackctl.core.use_cases.track import run_tracker_command

        ctx.ensure_object(dict)
        options = TrackerOptions(
            session_name=session_name,
            kernel=kernel,
            userspace=userspace,
            pid_given=pid_string is not None,
            pid_string=pid_string,
            all_pids=all_pids,
            mi=ctx.obj.get("mi"),
        )

        try:
            config = load_config(ctx.obj.get("config_path"))
        except ConfigError as e:
            click.secho(f"Error: {e}", fg="red", err=True)
            sys.exit(int(ExitCode.ERROR))

        control = _resolve_control(ctx, config)
        run = run_tracker_command(
            operation,
            options,
            control,
            config=config,
            report_stream=sys.stdout,
        )

        # Failures inside the invoker are logged where they happen;
        # only errors that never reached it are printed here.
        if run.result is None:
            click.secho(f"Error: {run.error}", fg="red", err=True)
            if run.show_usage:
                click.echo(ctx.get_usage(), err=True)
        elif run.exit_code == ExitCode.REPORT_IO_FAILURE:
            click.secho(f"Error: {run.error}", fg="red", err=True)
        elif run.result.ok and not options.mi and not ctx.obj.get("quiet"):
            result = run.result
            if result.attempted == (ALL_PIDS,):
                subject = "All PIDs"
            else:
                subject = "PID " + ", ".join(str(pid) for pid in result.attempted)
            click.secho(
                f"✅ {subject} {_PAST_TENSE[operation]} in session "
                f"'{result.session_name}' ({result.domain})",
                fg="green",
                err=True,
            )

        if run.exit_code != ExitCode.SUCCESS:
            sys.exit(int(run.exit_code))

    return command


track = _tracker_command(TrackerOperation.TRACK)
untrack = _tracker_command(TrackerOperation.UNTRACK)
