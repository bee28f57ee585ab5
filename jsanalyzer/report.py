"""Console rendering of an AnalysisReport."""

from __future__ import annotations

import os
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from .model import AnalysisReport, DirectoryNode


def _rel(report: AnalysisReport, path: str) -> str:
    return escape(os.path.relpath(path, report.root))


def build_tree(node: DirectoryNode, tree: Optional[Tree] = None) -> Tree:
    if tree is None:
        tree = Tree(f"📂 [bold]{escape(node.name)}/[/bold]", guide_style="yellow")
    for directory in node.directories:
        build_tree(directory, tree.add(f"📂 {escape(directory.name)}/"))
    for name in node.files:
        tree.add(f"📄 {escape(name)}")
    return tree


def render_report(report: AnalysisReport, console: Optional[Console] = None) -> None:
    console = console or Console()

    console.print(f"[blue]📊 Scanning project: {escape(report.root)}[/blue]")

    if report.structure is not None:
        console.print("\n[bold on blue] PROJECT BREAKDOWN [/bold on blue]")
        console.print(build_tree(report.structure))

    console.print(
        f"\n[bold on magenta] FOUND: [bold white]{len(report.files)}[/bold white] "
        f"JavaScript/TypeScript files [/bold on magenta]"
    )

    console.print(f"\n[bold on red] LARGE FUNCTIONS (> {report.threshold} lines) [/bold on red]")
    if report.large_functions:
        for fn in report.large_functions:
            console.print(
                f"  [bright_red]⚠[/bright_red] [bold white]{escape(fn.name)}[/bold white] "
                f"([bold yellow]{fn.size}[/bold yellow] lines) in [cyan]{_rel(report, fn.file)}[/cyan]"
            )
    else:
        console.print("  [bold green]✔ No large functions found[/bold green]")

    console.print("\n[bold on green] MOST USED IMPORTS [/bold on green]")
    if report.top_imports:
        for row in report.top_imports:
            console.print(
                f"  [cyan]🔹[/cyan] [bold white]{escape(row.module)}[/bold white]: "
                f"[bold bright_yellow]{row.count}[/bold bright_yellow] times"
            )
    else:
        console.print("  [bold green]✔ No imports found[/bold green]")

    if not report.graph_available:
        console.print("\n[yellow]⚠ Dependency graph unavailable; cycle and unused-file checks skipped[/yellow]")
        return

    if report.cycles:
        console.print("\n[bold red]🔄 Circular Dependencies:[/bold red]")
        for cycle in report.cycles:
            chain = [_rel(report, path) for path in cycle] + [_rel(report, cycle[0])]
            console.print(f"  - {' → '.join(chain)}")
    else:
        console.print("\n[green]✔ No Circular Dependencies Found[/green]")

    if report.unused_files:
        console.print("\n[bold yellow]🗑  Unused Files:[/bold yellow]")
        for path in report.unused_files:
            console.print(f"  - {_rel(report, path)}")
    else:
        console.print("\n[green]✔ No Unused Files Found[/green]")
