#!/usr/bin/env python3
"""CLI tool for updating Jira issues from builds."""

import os
import sys

import click
from rich.console import Console
from rich.table import Table

from .build import Build, BuildResult, ChangelogIssueUpdate, PostBuildIssueUpdate
from .changelog import read_git_changelog
from .common import setup_logging
from .config import AppConfig
from .exceptions import JiraBuildError
from .extractor import compile_issue_pattern, extract_identifiers

console = Console()


def _print_outcomes(outcomes):
    if not outcomes:
        return
    table = Table(title="Issue Updates")
    table.add_column("Issue", style="cyan")
    table.add_column("Transitioned", style="green")
    table.add_column("Commented", style="yellow")
    table.add_column("Error", style="red")
    for outcome in outcomes:
        table.add_row(
            outcome.issue_key,
            "✅" if outcome.transitioned else "-",
            "✅" if outcome.commented else "-",
            outcome.error or "",
        )
    console.print(table)


def _finish(build, step):
    _print_outcomes(step.outcomes)
    if build.result == BuildResult.FAILURE:
        console.print(f"❌ Issues were not updated for job {build.job_name}", style="red")
        sys.exit(1)
    console.print(f"✅ Issue update finished for job {build.job_name}")


@click.group()
@click.option("--config", default="jirabuild.yml", help="Configuration file path")
@click.option("--log-dir", envvar="JIRABUILD_LOG_DIR", help="Write a log file to this directory")
@click.pass_context
def cli(ctx, config, log_dir):
    """Update Jira issues referenced by builds."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    if log_dir:
        setup_logging(log_dir)


@cli.command()
@click.argument("job")
@click.option("--jql", required=True, help="JQL query selecting the issues to update")
@click.option("--action", "workflow_action", help="Name of the workflow action to apply")
@click.option("--comment", help="Comment to add to every matching issue")
@click.pass_context
def progress(ctx, job, jql, workflow_action, comment):
    """Progress the issues matching a JQL query."""
    try:
        config = AppConfig.load(ctx.obj["config_path"])
        build = Build(job_name=job, environment=dict(os.environ))
        step = PostBuildIssueUpdate(jql=jql, workflow_action=workflow_action, comment=comment)
        step.perform(build, config)
    except JiraBuildError as e:
        console.print(f"❌ Error updating issues: {e}", style="red")
        sys.exit(1)
    _finish(build, step)


@cli.command()
@click.argument("job")
@click.option("--rev-range", help="Git revision range to scan (default: last commit)")
@click.option("--repo", default=".", help="Path of the git repository")
@click.option("--action", "workflow_action", help="Name of the workflow action to apply")
@click.option("--comment", help="Comment to add to every referenced issue")
@click.pass_context
def changelog(ctx, job, rev_range, repo, workflow_action, comment):
    """Progress the issues referenced by commit messages."""
    try:
        config = AppConfig.load(ctx.obj["config_path"])
        entries = read_git_changelog(rev_range, repo)
        build = Build(job_name=job, environment=dict(os.environ), change_log=entries)
        step = ChangelogIssueUpdate(workflow_action=workflow_action, comment=comment)
        step.perform(build, config)
    except JiraBuildError as e:
        console.print(f"❌ Error updating issues: {e}", style="red")
        sys.exit(1)
    _finish(build, step)


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--pattern", help="Issue pattern (default: Jira style keys)")
def scan(source, pattern):
    """Print the issue identifiers found in a text file or stdin."""
    try:
        compiled = compile_issue_pattern(pattern)
    except JiraBuildError as e:
        console.print(f"❌ {e}", style="red")
        sys.exit(1)

    ids = extract_identifiers(source.read(), compiled)
    if not ids:
        console.print("❌ No issue identifiers found")
        return
    for issue_id in sorted(ids):
        console.print(issue_id)


@cli.command()
@click.pass_context
def sites(ctx):
    """List configured sites and the jobs bound to them."""
    try:
        config = AppConfig.load(ctx.obj["config_path"])
    except JiraBuildError as e:
        console.print(f"❌ Error listing sites: {e}", style="red")
        sys.exit(1)

    table = Table(title="Configured Sites")
    table.add_column("Site", style="cyan")
    table.add_column("URL", style="green")
    table.add_column("Issue Pattern", style="yellow")
    table.add_column("Jobs", style="magenta")

    for site in config.sites:
        jobs = ", ".join(job.name for job in config.jobs if job.site == site.name) or "None"
        table.add_row(site.name, site.url, site.issue_pattern or "default", jobs)

    console.print(table)


if __name__ == "__main__":
    cli()
