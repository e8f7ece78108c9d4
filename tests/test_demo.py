"""Tests for the demo scene."""

from term_surfaces import StandardScreen
from term_surfaces import demo
from term_surfaces.native import KEY_RIGHT

from conftest import create_mock_service


class TestDemo:
    """Tests for the demo consumer."""

    def test_quits_on_q(self):
        """Test that the scene is drawn and q ends the loop."""
        service = create_mock_service(24, 80)
        scr = StandardScreen(service=service)
        assert demo.run(scr) == 0
        assert service.init_pair.call_count == 4
        assert service.newwin.call_count == 3
        assert service.wrefresh.call_count == 3
        assert service.delwin.call_count == 3

    def test_moves_player(self):
        """Test that an arrow key moves the player one column right."""
        service = create_mock_service(24, 80)
        service.wgetch.side_effect = [KEY_RIGHT, ord('q')]
        scr = StandardScreen(service=service)
        demo.run(scr)
        placed = [c.args[1:] for c in service.mvwaddch.call_args_list]
        assert placed[-2:] == [(5, 40, '.'), (5, 41, '@')]

    def test_missing_up_key(self):
        """Test that the scene is skipped without an UP key."""
        service = create_mock_service()
        service.has_key.return_value = False
        scr = StandardScreen(service=service)
        assert demo.run(scr) == 0
        service.newwin.assert_not_called()
        service.waddstr.assert_called_once()

    def test_monochrome_terminal(self):
        """Test that the scene runs without registering colors on a monochrome terminal."""
        service = create_mock_service(24, 80, colors=False)
        scr = StandardScreen(service=service)
        assert demo.run(scr) == 0
        service.init_pair.assert_not_called()
        assert service.newwin.call_count == 3

    def test_status_fits_narrow_bar(self):
        """Test that the status line stops short of the bar's right border."""
        service = create_mock_service(24, demo.MIN_WIDTH)
        scr = StandardScreen(service=service)
        demo.run(scr)
        status = [c.args[3] for c in service.mvwaddstr.call_args_list
                  if c.args[1:3] == (1, 4)]
        assert status
        assert all(4 + len(text) <= demo.MIN_WIDTH - 1 for text in status)
        assert status[0].startswith("Screen is 24x30")

    def test_main_reports_errors(self, capsys, monkeypatch):
        """Test that faults are reported on stderr with status 1."""
        service = create_mock_service()
        service.initscr.return_value = None
        monkeypatch.setattr(demo, 'StandardScreen',
                            lambda mode: StandardScreen(mode, service=service))
        assert demo.main() == 1
        assert 'terminal operation failed' in capsys.readouterr().err
