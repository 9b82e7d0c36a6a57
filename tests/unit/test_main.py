"""
Tests for the command-line entry point.
"""

from unittest.mock import Mock, patch

import yaml

from skywidget.main import build_parser, check_config, main


class TestParser:
    """Test argument parsing"""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config is None
        assert args.log_level == "INFO"
        assert args.once is False
        assert args.check is False

    def test_flags(self):
        args = build_parser().parse_args(["w.yaml", "--once", "--log-level", "DEBUG"])
        assert args.config == "w.yaml"
        assert args.once is True
        assert args.log_level == "DEBUG"


class TestCheckConfig:
    """Test --check output"""

    def test_valid(self, config_file, capsys):
        assert check_config(str(config_file)) == 0
        assert "valid" in capsys.readouterr().out

    def test_errors(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"surface": {"type": "dom"}, "extra": 1}))
        assert check_config(str(path)) == 1
        out = capsys.readouterr().out
        assert "Invalid surface type: dom" in out
        assert "Unknown configuration section: extra" in out
        assert "1 error" in out

    def test_bad_yaml(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("surface: [\n")
        assert check_config(str(path)) == 1
        assert "Invalid YAML" in capsys.readouterr().out

    def test_directory_rejected(self, tmp_path, capsys):
        assert check_config(str(tmp_path)) == 1
        assert "directory" in capsys.readouterr().out

    def test_oversized_file_rejected(self, tmp_path, capsys):
        path = tmp_path / "big.yaml"
        path.write_text("# " + "x" * (1024 * 1024))
        assert check_config(str(path)) == 1
        assert "too large" in capsys.readouterr().out

    def test_empty_file_is_valid(self, tmp_path, capsys):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert check_config(str(path)) == 0


class TestMain:
    """Test the entry point flow"""

    def test_missing_config_file(self, tmp_path):
        assert main([str(tmp_path / "missing.yaml")]) == 1

    def test_check_flag(self, config_file):
        assert main([str(config_file), "--check"]) == 0

    def test_check_requires_file(self):
        assert main(["--check"]) == 1

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"location": {"provider": "gps"}}))
        assert main([str(path), "--once"]) == 1

    def test_once_runs_single_cycle(self, config_file):
        with patch("skywidget.main.WidgetController") as controller_class:
            controller = Mock()
            controller_class.from_config.return_value = controller
            assert main([str(config_file), "--once"]) == 0

        controller.run.assert_called_once()
        controller.start.assert_not_called()
        controller.surface.close.assert_called_once()

    def test_refresh_disabled_runs_once(self, tmp_path):
        path = tmp_path / "once.yaml"
        path.write_text(yaml.dump({"refresh": {"enabled": False}}))
        with patch("skywidget.main.WidgetController") as controller_class:
            controller = Mock()
            controller.auto_refresh = False
            controller_class.from_config.return_value = controller
            assert main([str(path)]) == 0

        controller.run.assert_called_once()

    def test_daemon_stops_on_interrupt(self, config_file):
        with (
            patch("skywidget.main.WidgetController") as controller_class,
            patch("skywidget.main.signal.signal") as mock_signal,
        ):
            controller = Mock()
            controller.auto_refresh = True
            controller.wait.side_effect = KeyboardInterrupt()
            controller_class.from_config.return_value = controller
            assert main([str(config_file)]) == 0

        controller.start.assert_called_once()
        controller.stop.assert_called_once()
        assert mock_signal.call_count == 2

    def test_signal_handler_raises_keyboard_interrupt(self, config_file):
        with (
            patch("skywidget.main.WidgetController") as controller_class,
            patch("skywidget.main.signal.signal") as mock_signal,
        ):
            controller = Mock()
            controller.auto_refresh = True
            controller_class.from_config.return_value = controller

            def wait(timeout):
                handler = mock_signal.call_args_list[0][0][1]
                handler(15, None)

            controller.wait.side_effect = wait
            assert main([str(config_file)]) == 0

        controller.stop.assert_called_once()
