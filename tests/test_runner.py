import asyncio
import unittest
from unittest.mock import Mock, patch

from app.checks.results import CheckOutcome
from app.models import Target
from app.notifier import NotifyError
from app.runner import build_notifier, run_all, run_once

TARGETS = [
    Target(name="web", url="https://web.example.local"),
    Target(name="api", url="https://api.example.local/health", timeout_seconds=2),
    Target(name="cdn", url="http://cdn.example.local"),
]


def _fake_check(down: set[str] = frozenset(), crash: set[str] = frozenset()):
    def fake(session, target, executor=None):
        if target.name in crash:
            raise RuntimeError("boom")
        if target.name in down:
            return CheckOutcome(
                name=target.name, url=target.url, success=False, error="Connection failed", response_time_ms=3
            )
        return CheckOutcome(
            name=target.name, url=target.url, success=True, status_code=200, response_time_ms=3
        )

    return fake


class RunAllTests(unittest.TestCase):
    def test_one_outcome_per_target(self) -> None:
        session = Mock()
        with patch("app.runner.check", side_effect=_fake_check()) as check_mock:
            outcomes = asyncio.run(run_all(TARGETS, session))

        self.assertEqual(sorted(o.name for o in outcomes), ["api", "cdn", "web"])
        self.assertEqual(check_mock.call_count, 3)
        for call in check_mock.call_args_list:
            self.assertIs(call.args[0], session)
            self.assertIsNotNone(call.args[2])

    def test_empty_targets(self) -> None:
        with patch("app.runner.check") as check_mock:
            outcomes = asyncio.run(run_all([], Mock()))

        self.assertEqual(outcomes, [])
        check_mock.assert_not_called()

    def test_crashed_task_is_logged_and_dropped(self) -> None:
        with patch("app.runner.check", side_effect=_fake_check(crash={"api"})):
            with self.assertLogs("app.runner", level="WARNING") as logs:
                outcomes = asyncio.run(run_all(TARGETS, Mock()))

        self.assertEqual(sorted(o.name for o in outcomes), ["cdn", "web"])
        self.assertTrue(any("Check task failed" in line for line in logs.output))
        self.assertTrue(any("1 of 3 checks did not complete" in line for line in logs.output))


class RunOnceTests(unittest.TestCase):
    def test_all_up_does_not_notify(self) -> None:
        notifier = Mock()
        with patch("app.runner.check", side_effect=_fake_check()):
            summary = asyncio.run(run_once(TARGETS, Mock(), notifier=notifier))

        notifier.notify.assert_not_called()
        self.assertEqual((summary.total_checked, summary.successful, summary.failed), (3, 3, 0))

    def test_failures_notify_once_with_all_failures(self) -> None:
        notifier = Mock()
        with patch("app.runner.check", side_effect=_fake_check(down={"web", "cdn"})):
            summary = asyncio.run(run_once(TARGETS, Mock(), notifier=notifier))

        notifier.notify.assert_called_once()
        sent = notifier.notify.call_args.args[0]
        self.assertEqual(sorted(f.name for f in sent), ["cdn", "web"])
        self.assertEqual(summary.failed, 2)
        self.assertEqual(summary.successful, 1)

    def test_missing_webhook_is_logged_not_raised(self) -> None:
        with patch("app.runner.check", side_effect=_fake_check(down={"web"})):
            with self.assertLogs("app.runner", level="WARNING") as logs:
                summary = asyncio.run(run_once(TARGETS, Mock(), notifier=None))

        self.assertEqual(summary.failed, 1)
        self.assertTrue(any("SLACK_WEBHOOK_URL not set" in line for line in logs.output))

    def test_notify_error_does_not_fail_run(self) -> None:
        notifier = Mock()
        notifier.notify.side_effect = NotifyError("Slack webhook returned HTTP 500: oops")
        with patch("app.runner.check", side_effect=_fake_check(down={"api"})):
            with self.assertLogs("app.runner", level="ERROR") as logs:
                summary = asyncio.run(run_once(TARGETS, Mock(), notifier=notifier))

        self.assertEqual(summary.total_checked, 3)
        self.assertEqual(summary.failed, 1)
        self.assertTrue(any("Failed to send Slack notification" in line for line in logs.output))


class BuildNotifierTests(unittest.TestCase):
    def test_none_without_webhook(self) -> None:
        with patch("app.runner.settings.SLACK_WEBHOOK_URL", None):
            self.assertIsNone(build_notifier())

    def test_uses_configured_webhook(self) -> None:
        with patch("app.runner.settings.SLACK_WEBHOOK_URL", "https://hooks.slack.example/x"), patch(
            "app.runner.settings.SLACK_TIMEOUT_SECONDS", 2.0
        ):
            notifier = build_notifier()

        self.assertEqual(notifier.cfg.webhook_url, "https://hooks.slack.example/x")
        self.assertEqual(notifier.cfg.timeout_s, 2.0)


if __name__ == "__main__":
    unittest.main()
