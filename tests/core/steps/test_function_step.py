"""Tests for FunctionStep and the Step protocol."""

import pytest

from agentgraph.core.context import ExecutionContext
from agentgraph.core.steps import FunctionStep, ScriptedStep, Step, coerce_result
from agentgraph.core.types import StepResult, Usage


class TestStepProtocol:
    """Tests for the Step protocol."""

    def test_builtin_steps_satisfy_protocol(self):
        """FunctionStep and ScriptedStep are Steps."""
        assert isinstance(FunctionStep(lambda ctx, text: text), Step)
        assert isinstance(ScriptedStep(), Step)

    def test_custom_class_satisfies_protocol(self):
        """Any object with an async run() is a Step."""

        class Upper:
            async def run(self, context, input):
                return StepResult(output=input.upper())

        assert isinstance(Upper(), Step)


class TestCoerceResult:
    """Tests for coerce_result()."""

    def test_step_result_passthrough(self):
        """StepResults are returned unchanged."""
        result = StepResult(output="x", cost=0.1)
        assert coerce_result(result) is result

    def test_string(self):
        """Strings become zero-usage results."""
        result = coerce_result("hello")
        assert result.output == "hello"
        assert result.usage == Usage()
        assert result.cost == 0.0

    def test_other_type(self):
        """Anything else is a TypeError."""
        with pytest.raises(TypeError, match="StepResult or str"):
            coerce_result(42)


class TestFunctionStep:
    """Tests for FunctionStep."""

    @pytest.mark.asyncio
    async def test_sync_function(self):
        """Sync functions are called with (context, input)."""
        step = FunctionStep(lambda ctx, text: text.upper())
        result = await step.run(ExecutionContext(), "hello")
        assert result.output == "HELLO"

    @pytest.mark.asyncio
    async def test_async_function(self):
        """Async functions are awaited."""

        async def shout(ctx, text):
            return StepResult(output=text + "!", usage=Usage(1, 1, 2), cost=0.01)

        result = await FunctionStep(shout).run(ExecutionContext(), "hi")
        assert result.output == "hi!"
        assert result.usage.total_tokens == 2
        assert result.cost == 0.01

    @pytest.mark.asyncio
    async def test_receives_context(self):
        """The function sees the visit context."""
        seen = []
        step = FunctionStep(lambda ctx, text: seen.append((ctx.node, ctx.visit)) or text)

        await step.run(ExecutionContext().for_visit("writer", 3), "x")
        assert seen == [("writer", 3)]

    @pytest.mark.asyncio
    async def test_error_propagates(self):
        """Exceptions from the function propagate unchanged."""

        def fail(ctx, text):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await FunctionStep(fail).run(ExecutionContext(), "x")

    @pytest.mark.asyncio
    async def test_bad_return_type(self):
        """Returning something other than StepResult or str is a TypeError."""
        with pytest.raises(TypeError):
            await FunctionStep(lambda ctx, text: None).run(ExecutionContext(), "x")

    def test_name_defaults_to_function_name(self):
        """name defaults to the function's __name__."""

        def summarize(ctx, text):
            return text

        assert FunctionStep(summarize).name == "summarize"
        assert FunctionStep(summarize, name="custom").name == "custom"

    def test_requires_callable(self):
        """A non-callable fn is rejected."""
        with pytest.raises(TypeError, match="callable"):
            FunctionStep("not callable")  # type: ignore[arg-type]
