"""Entry points that build a plan, configure an engine and run it."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

import click

from testbridge.configurators import Configurator, registry as configurators
from testbridge.engine.base import Engine
from testbridge.engine.unittest_engine import UnittestEngine
from testbridge.reporting.base import RunListener
from testbridge.reporting.bridge import select_reporter

from .models import CONFIGURATOR_OPTION, OptionSet, Plan
from .plan_builder import PlanBuilder
from .selectors import SelectorChain

PathLike = Union[str, Path]


class EngineRunner:
    """Prepares an engine for host-owned reporting and invokes it once."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def run(
        self,
        *,
        reports_directory: PathLike,
        listener: RunListener,
        run_name: str,
        source_directory: Optional[PathLike] = None,
        plan: Optional[Plan] = None,
        suite_files: Optional[Sequence[PathLike]] = None,
    ) -> None:
        engine = self._engine
        # the host owns all user-visible output
        engine.verbose = 0
        engine.add_listener(select_reporter(listener, run_name, engine))
        if source_directory is not None:
            engine.source_path = str(source_directory)
        engine.output_directory = str(Path(reports_directory).expanduser().resolve())
        if plan is not None:
            engine.set_plan(plan)
        if suite_files is not None:
            engine.set_suite_files([str(path) for path in suite_files])
        engine.run()


def create_configurator(options: OptionSet) -> Configurator:
    configurator = configurators.create(options.get(CONFIGURATOR_OPTION))
    click.echo(f"Configuring engine with: {type(configurator).__name__}")
    return configurator


def build_plan(
    classes: Sequence[type],
    configurator: Configurator,
    options: OptionSet,
    method_pattern: Optional[str] = None,
) -> Plan:
    selectors = SelectorChain().build(options, method_pattern)
    return PlanBuilder(configurator, options, selectors).build(classes)


def run_classes(
    classes: Sequence[type],
    source_directory: Optional[PathLike],
    options: OptionSet,
    listener: RunListener,
    run_name: str,
    reports_directory: PathLike,
    method_pattern: Optional[str] = None,
    *,
    engine: Optional[Engine] = None,
) -> Engine:
    """Group ``classes`` into suites and run them through the engine."""

    engine = engine if engine is not None else UnittestEngine()
    configurator = create_configurator(options)
    plan = build_plan(classes, configurator, options, method_pattern)
    engine.set_plan(plan)
    configurator.configure_engine(engine, options)
    EngineRunner(engine).run(
        reports_directory=reports_directory,
        listener=listener,
        run_name=run_name,
        source_directory=source_directory,
    )
    return engine


def run_suite_files(
    suite_files: Sequence[PathLike],
    source_directory: Optional[PathLike],
    options: OptionSet,
    listener: RunListener,
    run_name: str,
    reports_directory: PathLike,
    *,
    engine: Optional[Engine] = None,
) -> Engine:
    """Hand pre-authored descriptor files to the engine; no plan is built."""

    engine = engine if engine is not None else UnittestEngine()
    configurator = create_configurator(options)
    configurator.configure_engine(engine, options)
    EngineRunner(engine).run(
        reports_directory=reports_directory,
        listener=listener,
        run_name=run_name,
        source_directory=source_directory,
        suite_files=suite_files,
    )
    return engine
