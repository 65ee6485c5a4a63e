"""
Tests for CLI argument parsing and validation.
"""
import sys
from unittest import mock
import pytest
from clonespotter.cli import CLIApplication
from clonespotter.core.models import DEFAULT_EXCLUDED_DIRS, HashAlgorithm


class TestArgumentParsing:
    """Test CLI argument parsing with argparse."""

    def test_defaults(self):
        with mock.patch.object(sys, 'argv', ['clone-spotter', '/tmp/test']):
            args = CLIApplication.parse_args()

        assert args.root == "/tmp/test"
        assert args.directory is None
        assert args.output == "./output"
        assert args.filename == "duplicates"
        assert args.algorithm == "md5"
        assert args.exclude == ""
        assert args.workers == "4"
        assert not args.interactive
        assert not args.terminal

    def test_directory_flag_variants(self):
        """Test both long (--directory) and short (-d) forms."""
        with mock.patch.object(sys, 'argv', ['clone-spotter', '--directory', '/tmp/test']):
            args = CLIApplication.parse_args()
        assert args.directory == "/tmp/test"

        with mock.patch.object(sys, 'argv', ['clone-spotter', '-d', '/tmp/test']):
            args = CLIApplication.parse_args()
        assert args.directory == "/tmp/test"

    def test_positional_root_wins_over_flag(self):
        args = CLIApplication.parse_args(['/tmp/a', '-d', '/tmp/b'])
        assert CLIApplication.root_dir_of(args) == "/tmp/a"

    def test_short_flags(self):
        args = CLIApplication.parse_args([
            '/tmp', '-o', 'reports', '-f', 'pics', '-a', 'sha1', '-e', 'vendor', '-w', '8', '-t', '-q'
        ])
        assert args.output == "reports"
        assert args.filename == "pics"
        assert args.algorithm == "sha1"
        assert args.exclude == "vendor"
        assert args.workers == "8"
        assert args.terminal
        assert args.quiet


class TestCreateParams:
    """Test conversion of parsed arguments into ScanParams."""

    def test_exclusions_merged_with_defaults(self, temp_dir):
        app = CLIApplication()
        args = app.parse_args([str(temp_dir), '-e', 'vendor,.venv', '-a', 'XXH128', '-w', '2'])

        params = app.create_params(args)

        assert params.excluded_dirs == list(DEFAULT_EXCLUDED_DIRS) + ["vendor", ".venv"]
        assert params.algorithm == HashAlgorithm.XXH128
        assert params.workers == 2

    def test_no_default_excludes(self, temp_dir):
        app = CLIApplication()
        args = app.parse_args([str(temp_dir), '--no-default-excludes'])
        assert app.create_params(args).excluded_dirs == []

    @pytest.mark.parametrize("workers", ["0", "-1", "many"])
    def test_bad_workers_become_default(self, temp_dir, workers):
        app = CLIApplication()
        args = app.parse_args([str(temp_dir), '-w', workers])
        assert app.create_params(args).workers == 4


class TestValidation:

    def test_valid_args_pass(self, temp_dir):
        app = CLIApplication()
        app.validate_args(app.parse_args([str(temp_dir)]))

    @pytest.mark.parametrize("extra", [['-a', 'blake3'], ['-q', '--verbose'], ['-f', '']])
    def test_invalid_combinations_exit(self, temp_dir, extra):
        app = CLIApplication()
        with pytest.raises(SystemExit) as exc:
            app.validate_args(app.parse_args([str(temp_dir), *extra]))
        assert exc.value.code == 1
