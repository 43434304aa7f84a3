"""Tests for the task host."""

import asyncio
import logging

import click
import pytest
from click.testing import CliRunner

from samples import messages
from unittask.host import Task, TaskArgument, TaskContext, TaskResult, TaskRunner
from unittask.logs import CONFIG, TRACE


class TestTaskContext:
    """Tests for TaskContext."""

    def test_levels(self, context, caplog):
        """Test each method logs at its level."""
        context.trace("t")
        context.config("c")
        context.info("i")
        context.warning("w")
        context.severe("s")

        assert [record.levelno for record in caplog.records] == [
            TRACE,
            CONFIG,
            logging.INFO,
            logging.WARNING,
            logging.ERROR,
        ]

    def test_sub_logger(self, context, caplog):
        """Test sub-loggers are scoped under the parent name."""
        sub = context.get_sub_logger("FAIL")
        sub.severe("broken")

        assert sub.name == "unittask.test.FAIL"
        assert messages(caplog, "unittask.test.FAIL") == ["broken"]

    def test_sub_logger_shares_arguments(self, logger):
        """Test parsed arguments are visible from sub-loggers."""
        context = TaskContext(logger, arguments={"list": True})
        assert context.get_sub_logger("PASS").arguments == {"list": True}


class TestTaskRunner:
    """Tests for TaskRunner."""

    def test_duplicate_task_rejected(self):
        """Test task names are unique."""
        runner = TaskRunner()
        runner.add_task("test", Task(lambda ctx: None))
        with pytest.raises(ValueError):
            runner.add_task("test", Task(lambda ctx: None))

    def test_unknown_task(self):
        """Test looking up an unknown task."""
        with pytest.raises(KeyError):
            TaskRunner().get_task("missing")

    async def test_none_is_success(self, context):
        """Test a body returning None succeeds."""
        runner = TaskRunner()
        runner.add_task("noop", Task(lambda ctx: None))

        assert await runner.run_task("noop", context) == TaskResult.ok()

    async def test_awaitable_result(self, context):
        """Test awaitable results are awaited."""

        async def finish():
            return TaskResult.failure("nope")

        runner = TaskRunner()
        runner.add_task("later", Task(lambda ctx: finish(), timeout=1))

        assert await runner.run_task("later", context) == TaskResult.failure("nope")

    async def test_timeout_becomes_failure(self, context):
        """Test a result that never arrives fails after the timeout."""
        runner = TaskRunner()
        runner.add_task("hang", Task(lambda ctx: asyncio.Event().wait(), timeout=0.01))

        result = await runner.run_task("hang", context)

        assert not result.success
        assert "did not finish within 0.01 seconds" in result.reason

    async def test_runner_timeout_overrides_task(self, context):
        """Test the runner timeout takes precedence."""
        runner = TaskRunner(timeout=0.01)
        runner.add_task("hang", Task(lambda ctx: asyncio.Event().wait(), timeout=60))

        assert not (await runner.run_task("hang", context)).success

    async def test_unexpected_result_type(self, context):
        """Test a body returning something else is an error."""
        runner = TaskRunner()
        runner.add_task("odd", Task(lambda ctx: 42))

        with pytest.raises(TypeError):
            await runner.run_task("odd", context)

    def test_create_context(self):
        """Test parsed values are split into options and extended args."""
        runner = TaskRunner()
        runner.add_task(
            "test",
            Task(
                lambda ctx: None,
                options=[click.Option(["--list", "-l"], is_flag=True)],
                extended_args=[TaskArgument("filter", multiple=True)],
            ),
        )

        ctx = runner.create_context("test", list=True, filter=("a", "b"))

        assert ctx.arguments == {"list": True}
        assert ctx.extended_args == {"filter": ("a", "b")}
        assert ctx.name == "unittask.test"


class TestAttach:
    """Tests for the click commands built from tasks."""

    def _group(self, runner):
        @click.group()
        def cli():
            pass

        return runner.attach(cli)

    def test_command_receives_parameters(self):
        """Test options and arguments reach the task context."""
        seen = {}

        def body(ctx):
            seen.update(ctx.arguments, **ctx.extended_args)

        runner = TaskRunner()
        runner.add_task(
            "echo",
            Task(
                body,
                options=[click.Option(["--loud", "-L"], is_flag=True)],
                extended_args=[TaskArgument("words", multiple=True)],
            ),
        )

        result = CliRunner().invoke(self._group(runner), ["echo", "-L", "a", "b"])

        assert result.exit_code == 0
        assert seen == {"loud": True, "words": ("a", "b")}

    def test_failure_exits_nonzero(self, caplog):
        """Test a failed task logs its reason and exits with status 1."""
        runner = TaskRunner()
        runner.add_task("fail", Task(lambda ctx: TaskResult.failure("it broke")))

        with caplog.at_level(logging.ERROR):
            result = CliRunner().invoke(self._group(runner), ["fail"])

        assert result.exit_code == 1
        assert "it broke" in caplog.text

    def test_exception_exits_nonzero(self, caplog):
        """Test a task raising an exception exits with status 1."""

        def body(ctx):
            raise RuntimeError("kaput")

        runner = TaskRunner()
        runner.add_task("crash", Task(body))

        with caplog.at_level(logging.ERROR):
            result = CliRunner().invoke(self._group(runner), ["crash"])

        assert result.exit_code == 1
        assert "Task 'crash' raised an error" in caplog.text
