"""
Unit tests for the builder module.

Tests make invocation with mocked subprocess calls.
"""

import unittest
from unittest.mock import patch, MagicMock

from kmodsetup.builder import (
    generate_clean_command,
    generate_build_command,
    run_clean,
    run_build,
    StageResult,
    StageStatus,
)


class TestGenerateCommands(unittest.TestCase):
    """Tests for make command generation."""

    def test_generate_clean_command(self):
        """Test clean command."""
        self.assertEqual(generate_clean_command(), ["make", "clean"])

    def test_generate_build_command_explicit_jobs(self):
        """Test build command with a given job count."""
        self.assertEqual(generate_build_command(4), ["make", "-j", "4"])

    @patch('kmodsetup.builder.available_jobs')
    def test_generate_build_command_detected_jobs(self, mock_jobs):
        """Test that the job count is detected when not given."""
        mock_jobs.return_value = 12

        self.assertEqual(generate_build_command(), ["make", "-j", "12"])
        mock_jobs.assert_called_once()

    @patch('kmodsetup.builder.available_jobs')
    def test_generate_build_command_detects_each_call(self, mock_jobs):
        """Test that detection happens at call time, not import time."""
        mock_jobs.side_effect = [2, 16]

        self.assertEqual(generate_build_command()[-1], "2")
        self.assertEqual(generate_build_command()[-1], "16")

    def test_generate_build_command_invalid_jobs(self):
        """Test error handling with a non-positive job count."""
        with self.assertRaises(ValueError) as ctx:
            generate_build_command(0)

        self.assertIn("positive", str(ctx.exception))


class TestStageResult(unittest.TestCase):
    """Tests for StageResult status."""

    def test_status_success(self):
        self.assertEqual(StageResult("build", ["make"], 0).status, StageStatus.SUCCESS)

    def test_status_failed(self):
        self.assertEqual(StageResult("build", ["make"], 2).status, StageStatus.FAILED)

    def test_status_skipped(self):
        self.assertEqual(StageResult("build", ["make"]).status, StageStatus.SKIPPED)


class TestRunClean(unittest.TestCase):
    """Tests for run_clean function."""

    @patch('kmodsetup.builder.subprocess.run')
    def test_run_clean_success(self, mock_run):
        """Test successful clean."""
        mock_run.return_value = MagicMock(returncode=0)

        result = run_clean()

        mock_run.assert_called_once_with(["make", "clean"], check=False)
        self.assertEqual(result.stage, "clean")
        self.assertEqual(result.exit_code, 0)

    @patch('kmodsetup.builder.subprocess.run')
    def test_run_clean_failure_is_returned_not_raised(self, mock_run):
        """Test that a failing clean is recorded without raising."""
        mock_run.return_value = MagicMock(returncode=2)

        result = run_clean()

        self.assertEqual(result.exit_code, 2)
        self.assertEqual(result.status, StageStatus.FAILED)

    @patch('kmodsetup.builder.subprocess.run')
    def test_run_clean_dry_run(self, mock_run):
        """Test that dry-run does not invoke make."""
        result = run_clean(dry_run=True)

        mock_run.assert_not_called()
        self.assertEqual(result.command, ["make", "clean"])
        self.assertIsNone(result.exit_code)


class TestRunBuild(unittest.TestCase):
    """Tests for run_build function."""

    @patch('kmodsetup.builder.subprocess.run')
    def test_run_build_success(self, mock_run):
        """Test successful build."""
        mock_run.return_value = MagicMock(returncode=0)

        result = run_build(jobs=8)

        mock_run.assert_called_once_with(["make", "-j", "8"], check=False)
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.status, StageStatus.SUCCESS)

    @patch('kmodsetup.builder.subprocess.run')
    def test_run_build_failure_exit_code(self, mock_run):
        """Test that make's exit code is passed through."""
        mock_run.return_value = MagicMock(returncode=2)

        result = run_build(jobs=8)

        self.assertEqual(result.exit_code, 2)

    @patch('kmodsetup.builder.subprocess.run')
    def test_run_build_killed_by_signal(self, mock_run):
        """Test that death by signal maps to the shell status."""
        mock_run.return_value = MagicMock(returncode=-2)

        result = run_build(jobs=8)

        self.assertEqual(result.exit_code, 130)

    @patch('kmodsetup.builder.subprocess.run')
    def test_run_build_make_missing(self, mock_run):
        """Test that a missing make binary yields 127."""
        mock_run.side_effect = FileNotFoundError("make")

        result = run_build(jobs=8)

        self.assertEqual(result.exit_code, 127)

    @patch('kmodsetup.builder.available_jobs')
    @patch('kmodsetup.builder.subprocess.run')
    def test_run_build_uses_detected_jobs(self, mock_run, mock_jobs):
        """Test that the detected processor count is requested."""
        mock_jobs.return_value = 6
        mock_run.return_value = MagicMock(returncode=0)

        run_build()

        self.assertEqual(mock_run.call_args[0][0], ["make", "-j", "6"])

    @patch('kmodsetup.builder.subprocess.run')
    def test_run_build_dry_run(self, mock_run):
        """Test that dry-run does not invoke make."""
        result = run_build(jobs=3, dry_run=True)

        mock_run.assert_not_called()
        self.assertEqual(result.command, ["make", "-j", "3"])
        self.assertEqual(result.status, StageStatus.SKIPPED)


if __name__ == '__main__':
    unittest.main()
