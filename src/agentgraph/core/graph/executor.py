"""Executor - drives one run of a graph through its state machine.

Each tick visits exactly one node:

1. Stop if the run was cancelled, timed out, hit max_iterations, or
   exhausted its budget
2. Invoke the node's step, racing it against cancellation and the deadline
3. Record the visit (results, usage, cost, trace)
4. Route on the fresh output; no matching edge terminates the run

An Executor is single-use. Graph.run() creates a fresh one per call, so
concurrent runs of one Graph share nothing but the frozen definition.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime
from typing import TYPE_CHECKING, Any

from agentgraph.core import errors
from agentgraph.core.context import ExecutionContext
from agentgraph.core.graph.result import RunResult, VisitResult
from agentgraph.core.graph.state import Failed, Running, RunState, Terminated
from agentgraph.core.run_logging import (
    generate_run_id,
    log_complete,
    log_error,
    log_start,
    log_warning,
)
from agentgraph.core.steps.base import coerce_result
from agentgraph.core.trace import VisitTrace
from agentgraph.core.types import StepResult, Usage

if TYPE_CHECKING:
    from agentgraph.core.cancellation import CancellationToken
    from agentgraph.core.graph.graph import Graph
    from agentgraph.core.steps.base import Step
    from agentgraph.core.trace import ExecutionTrace

logger = logging.getLogger(__name__)


class Executor:
    """Runs a Graph once.

    Args:
        graph: The graph to run.
        cancellation: Token that aborts the run, including the in-flight step.
        trace: Trace to record visits into.
        metadata: Values exposed to steps via ExecutionContext.metadata.
    """

    def __init__(
        self,
        graph: Graph,
        *,
        cancellation: CancellationToken | None = None,
        trace: ExecutionTrace | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self._graph = graph
        self._cancellation = cancellation
        self._trace = trace
        self._metadata = dict(metadata or {})

        self._run_id = generate_run_id()
        self._results: dict[str, list[VisitResult]] = {}
        self._path: list[str] = []
        self._usage = Usage()
        self._cost = 0.0
        self._deadline: float | None = None
        self._started = False

    @property
    def run_id(self) -> str:
        """Identifier of this run."""
        return self._run_id

    async def run(self, input: str) -> RunResult:
        """Run the graph to completion.

        Args:
            input: Input for the start node.

        Returns:
            RunResult on termination.

        Raises:
            GraphRunError: The run failed; see Graph.run().
            RuntimeError: If this executor was already used.
        """
        if self._started:
            raise RuntimeError("Executor instances are single-use; call Graph.run() again")
        self._started = True

        graph = self._graph
        config = graph.config
        loop = asyncio.get_running_loop()
        if config.timeout_seconds is not None:
            self._deadline = loop.time() + config.timeout_seconds

        if self._trace is not None:
            self._trace.run_id = self._run_id

        context = ExecutionContext(
            run_id=self._run_id,
            graph_name=graph.name,
            cancellation=self._cancellation,
            trace=self._trace,
            metadata=self._metadata,
        )

        log_start(
            logger,
            graph.name,
            "run_start",
            run_id=self._run_id,
            start=graph.start_node,
            max_iterations=config.max_iterations,
        )
        run_start_mono = time.monotonic()

        state: RunState = Running(node=graph.start_node, visits=0, input=input)
        while isinstance(state, Running):
            state = await self._tick(state, context)

        run_duration = time.monotonic() - run_start_mono

        if isinstance(state, Failed):
            error = state.error
            log_error(
                logger,
                graph.name,
                "run_failed",
                error,
                run_id=self._run_id,
                visits=len(self._path),
                duration_s=f"{run_duration:.1f}",
            )
            if self._trace is not None:
                if isinstance(error, errors.CancelledError):
                    self._trace.cancel(error.reason)
                else:
                    self._trace.complete(error=str(error))
            if isinstance(error, errors.StepError):
                raise error from error.cause
            raise error

        log_complete(
            logger,
            graph.name,
            "run_complete",
            run_duration,
            run_id=self._run_id,
            visits=len(self._path),
            final=self._path[-1] if self._path else None,
        )
        if self._trace is not None:
            self._trace.complete()

        return RunResult(
            run_id=self._run_id,
            graph_name=graph.name,
            output=state.output,
            total_cost=self._cost,
            total_usage=self._usage,
            node_results={name: list(results) for name, results in self._results.items()},
            path=list(self._path),
        )

    async def _tick(self, state: Running, context: ExecutionContext) -> RunState:
        """Advance the run by one visit."""
        graph = self._graph

        stop = self._check_limits(state)
        if stop is not None:
            return stop

        node = state.node
        visit = len(self._results.get(node, ())) + 1
        step = graph.get_step(node)
        visit_context = context.for_visit(node, visit)

        log_start(logger, graph.name, "visit_start", node=node, visit=visit, input=state.input)

        start_time = datetime.now()
        start_mono = time.monotonic()
        try:
            result = await self._invoke(step, visit_context, state.input)
        except errors.CancelledError as e:
            self._trace_visit(node, visit, state.input, start_time, start_mono, error=str(e))
            return Failed(e)
        except Exception as e:
            error = e if isinstance(e, errors.StepError) else errors.StepError(node, visit, e)
            message = str(error.cause) or type(error.cause).__name__
            log_error(
                logger,
                graph.name,
                "visit_failed",
                error.cause,
                node=node,
                visit=visit,
                duration_s=f"{time.monotonic() - start_mono:.1f}",
            )
            self._trace_visit(node, visit, state.input, start_time, start_mono, error=message)
            return Failed(error)

        duration = time.monotonic() - start_mono
        self._results.setdefault(node, []).append(
            VisitResult(
                node=node,
                visit=visit,
                input=state.input,
                output=result.output,
                usage=result.usage,
                cost=result.cost,
                duration_ms=duration * 1000,
                metadata=dict(result.metadata),
            )
        )
        self._path.append(node)
        self._usage = self._usage + result.usage
        self._cost += result.cost

        try:
            next_node = graph.select_next(node, result.output)
        except Exception as e:
            log_error(logger, graph.name, "route_failed", e, node=node, visit=visit)
            self._trace_visit(
                node, visit, state.input, start_time, start_mono, result=result, error=str(e)
            )
            return Failed(errors.StepError(node, visit, e))

        self._trace_visit(
            node, visit, state.input, start_time, start_mono, result=result, next_node=next_node
        )
        log_complete(
            logger,
            graph.name,
            "visit_complete",
            duration,
            node=node,
            visit=visit,
            next=next_node,
            tokens=result.usage.total_tokens,
        )

        if next_node is None:
            return Terminated(output=result.output)
        return Running(node=next_node, visits=state.visits + 1, input=result.output)

    def _check_limits(self, state: Running) -> Failed | None:
        """Return a Failed state if the run must stop before the next visit."""
        config = self._graph.config

        if self._cancellation is not None and self._cancellation.is_cancelled:
            return Failed(errors.CancelledError(self._cancellation.reason))

        if self._deadline is not None and asyncio.get_running_loop().time() >= self._deadline:
            return Failed(errors.CancelledError("timeout"))

        if state.visits >= config.max_iterations:
            log_warning(
                logger,
                self._graph.name,
                "max_iterations_reached",
                max_iterations=config.max_iterations,
                next=state.node,
            )
            return Failed(errors.MaxIterationsExceededError(config.max_iterations))

        if config.budget is not None and config.budget.is_limited():
            exceeded, reason = config.budget.exceeded_by(self._usage, self._cost)
            if exceeded:
                log_warning(logger, self._graph.name, "budget_exceeded", reason=reason)
                return Failed(errors.BudgetExceededError(str(reason), self._usage, self._cost))

        return None

    async def _invoke(self, step: Step, context: ExecutionContext, input: str) -> StepResult:
        """Run a step, aborting it if the token fires or the deadline passes.

        Anything the step itself raises, including asyncio.CancelledError and
        a CancelledError from a nested run, is reported as a StepError on
        this visit. Only the token and the deadline of this run cancel it.

        Raises:
            CancelledError: The run was cancelled or timed out mid-step.
            StepError: The step raised or returned an unsupported type.
        """
        task = asyncio.ensure_future(step.run(context, input))
        waiters: set[asyncio.Future[Any]] = {task}

        cancel_waiter: asyncio.Future[Any] | None = None
        if self._cancellation is not None:
            cancel_waiter = asyncio.ensure_future(self._cancellation.wait())
            waiters.add(cancel_waiter)

        timeout = None
        if self._deadline is not None:
            timeout = max(0.0, self._deadline - asyncio.get_running_loop().time())

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            await asyncio.shield(asyncio.gather(task, return_exceptions=True))
            raise
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()

        if task in done:
            try:
                return coerce_result(task.result())
            except (Exception, asyncio.CancelledError) as e:
                raise errors.StepError(str(context.node), context.visit, e) from e

        task.cancel()
        # Let the step unwind before the run reports failure.
        await asyncio.gather(task, return_exceptions=True)

        if cancel_waiter is not None and cancel_waiter in done:
            reason = self._cancellation.reason
        else:
            reason = "timeout"
        log_warning(logger, self._graph.name, "visit_aborted", node=context.node, reason=reason)
        raise errors.CancelledError(reason)

    def _trace_visit(
        self,
        node: str,
        visit: int,
        input: str,
        start_time: datetime,
        start_mono: float,
        *,
        result: StepResult | None = None,
        error: str | None = None,
        next_node: str | None = None,
    ) -> None:
        if self._trace is None:
            return
        self._trace.add_visit(
            VisitTrace(
                node=node,
                visit=visit,
                input=input,
                output=result.output if result is not None else None,
                error=error,
                start_time=start_time,
                end_time=datetime.now(),
                duration_ms=(time.monotonic() - start_mono) * 1000,
                tokens_used=result.usage.total_tokens if result is not None else 0,
                cost=result.cost if result is not None else 0.0,
                next_node=next_node,
            )
        )
