"""
Unit tests for the session controller, its phases and the command handlers.

Input is fed line by line through SessionController.feed() against a
ScriptedConsole, so every test sees exactly what a user at the prompt would.
"""

from unittest.mock import Mock

import pytest

from quizdesk.cli.commands.login import LOGIN_FAILED_MESSAGE
from quizdesk.cli.phases import LoggedInPhase, LoginPhase, Phase
from quizdesk.core.errors import PersistenceError


@pytest.fixture
def admin(app, make_student):
    student = make_student("Alice Smith", 16, password="adminpw", admin=True)
    app.roster.register(student)
    return student


@pytest.fixture
def pupil(app, make_student):
    student = make_student("Bob Jones", 15, password="pupilpw")
    app.roster.register(student)
    return student


def _signup(session, console, *answers):
    console.feed(*answers)
    session.feed("signup")


# ============================================================================
# Login phase
# ============================================================================


class TestLogin:
    """Test the login command."""

    def test_success_enters_logged_in_phase(self, session, console, admin):
        session.feed("login Ali16 adminpw")

        assert isinstance(session.current_phase, LoggedInPhase)
        assert session.current_phase.caller is admin
        assert "Welcome to QuizDesk, Alice Smith" in console.output

    def test_unknown_user_and_wrong_password_look_identical(self, session, console, admin):
        session.feed("login Nobody99 whatever")
        unknown_user = list(console.output)
        console.clear()

        session.feed("login Ali16 wrongpw")
        wrong_password = list(console.output)

        assert unknown_user == wrong_password == [LOGIN_FAILED_MESSAGE]
        assert isinstance(session.current_phase, LoginPhase)

    @pytest.mark.parametrize("line", ["login", "login Ali16", "login Ali16 adminpw extra"])
    def test_wrong_argument_count(self, session, console, admin, line):
        session.feed(line)

        assert console.output == ["Invalid input. login <username> <password>"]
        assert isinstance(session.current_phase, LoginPhase)

    def test_student_commands_unavailable_before_login(self, session, console, admin):
        session.feed("quiz maths easy")
        session.feed("report -g quiz -q maths:easy")

        assert console.output == ["Invalid command!", "Invalid command!"]


class TestSignup:
    """Test the signup command."""

    def test_first_student_becomes_admin(self, session, console, app):
        _signup(session, console, "Alice Smith", "16", "11", "pw")

        student = app.roster.get("Ali16")
        assert student.is_admin
        assert "Your username is: Ali16" in console.output
        assert session.current_phase.caller is student
        assert "Administrator Commands:" in console.output

    def test_later_students_are_not_admin(self, session, console, app, admin):
        _signup(session, console, "Bob Jones", "15", "10", "pw")

        assert not app.roster.get("Bob15").is_admin
        assert "Administrator Commands:" not in console.output

    def test_password_read_without_echo_and_hashed(self, session, console, app, roster_path):
        _signup(session, console, "Alice Smith", "16", "11", "topsecret")

        assert console.secret_reads == 1
        assert "topsecret" not in roster_path.read_text()
        assert app.hasher.verify("topsecret", app.roster.get("Ali16").password_hash)

    def test_colliding_username_gets_suffix(self, session, console, app, admin):
        _signup(session, console, "Alicia Jones", "16", "11", "pw")

        assert "Your username is: Ali16_2" in console.output
        assert app.roster.get("Ali16_2").fullname == "Alicia Jones"

    def test_invalid_age_registers_nobody(self, session, console, app):
        _signup(session, console, "Alice Smith", "old", "11", "pw")

        assert app.roster.is_empty()
        assert console.output[-1].startswith("Invalid signup details:")
        assert isinstance(session.current_phase, LoginPhase)

    def test_end_of_input_cancels(self, session, console, app):
        _signup(session, console, "Alice Smith", "16")

        assert app.roster.is_empty()
        assert console.output[-1] == "Signup cancelled."

    def test_signup_then_log_back_in(self, session, console, app):
        _signup(session, console, "Alice Smith", "16", "11", "pass-word")
        session.feed("logout")
        console.clear()

        session.feed("login Ali16 pass-word")

        assert isinstance(session.current_phase, LoggedInPhase)
        assert session.current_phase.caller is app.roster.get("Ali16")

    @pytest.mark.parametrize("password", ["my secret", "-dash"])
    def test_password_login_cannot_read_is_rejected(self, session, console, app, password):
        _signup(session, console, "Alice Smith", "16", "11", password)

        assert app.roster.is_empty()
        assert console.output[-1] == "Invalid signup details: password"
        assert isinstance(session.current_phase, LoginPhase)

    def test_dashed_name_can_log_back_in(self, session, console, app):
        _signup(session, console, "-Al Smith", "16", "11", "pw")
        session.feed("logout")
        console.clear()

        session.feed("login AlS16 pw")

        assert isinstance(session.current_phase, LoggedInPhase)
        assert session.current_phase.caller.fullname == "-Al Smith"

    def test_save_failure_registers_nobody(self, session, console, app):
        app.roster.store.save_all = Mock(side_effect=PersistenceError("disk full"))

        _signup(session, console, "Alice Smith", "16", "11", "pw")

        assert app.roster.is_empty()
        assert console.output[-1] == "disk full"
        assert isinstance(session.current_phase, LoginPhase)


# ============================================================================
# Logged-in phase
# ============================================================================


class TestLoggedIn:
    """Test the quiz, logout and report commands."""

    def test_help_lists_subjects(self, session, console, pupil):
        session.feed("login Bob15 pupilpw")

        assert "  maths (Mathematics)" in console.output
        assert "Administrator Commands:" not in console.output

    def test_help_is_idempotent(self, session, console, pupil):
        session.feed("login Bob15 pupilpw")
        console.clear()

        session.feed("help")
        first = list(console.output)
        console.clear()
        session.feed("help")

        assert console.output == first
        assert isinstance(session.current_phase, LoggedInPhase)

    def test_quiz(self, session, console, app, pupil):
        session.feed("login Bob15 pupilpw")
        console.clear()
        console.feed("0", "1", "0")

        session.feed("quiz maths easy")

        assert console.output[-3:] == ["Well Done!", "You achieved a A*!", "You scored 3/3 (100%)"]
        stored = {s.username: s for s in app.roster.store.load_all()}
        assert stored["Bob15"].attempts[0].percentage == 100

    @pytest.mark.parametrize("line", ["quiz history easy", "quiz maths extreme", "quiz MATHS easy"])
    def test_quiz_invalid_choice(self, session, console, pupil, line):
        session.feed("login Bob15 pupilpw")
        console.clear()

        session.feed(line)

        assert console.output == ["Invalid choice of subject or difficulty!"]

    def test_quiz_wrong_argument_count(self, session, console, pupil):
        session.feed("login Bob15 pupilpw")
        console.clear()

        session.feed("quiz maths")

        assert console.output == ["Invalid input. quiz <subject> <difficulty>"]

    def test_quiz_empty_bank(self, session, console, pupil):
        session.feed("login Bob15 pupilpw")
        console.clear()

        session.feed("quiz maths medium")

        assert console.output == ["There are no medium questions for maths yet!"]
        assert pupil.attempts == []

    def test_logout_returns_to_login(self, session, console, pupil):
        session.feed("login Bob15 pupilpw")
        session.feed("logout")

        assert session.current_phase is session.login_phase
        session.feed("quiz maths easy")
        assert console.output[-1] == "Invalid command!"

    def test_report_is_admin_only(self, session, console, pupil, tmp_path):
        session.feed("login Bob15 pupilpw")
        console.clear()

        session.feed(f"report -g student -s Bob15 -o {tmp_path / 'r.txt'}")

        assert console.output == ["Invalid command!"]
        assert not (tmp_path / "r.txt").exists()

    def test_admin_report(self, session, console, admin, pupil, tmp_path):
        out = tmp_path / "r.txt"
        session.feed("login Ali16 adminpw")
        console.clear()

        session.feed(f"report -g student -s Bob15 -o {out}")

        assert console.output == [f"Report written to {out}"]
        assert "Bob Jones (Bob15)" in out.read_text()

    def test_admin_report_error_is_printed(self, session, console, admin):
        session.feed("login Ali16 adminpw")
        console.clear()

        session.feed("report -g quiz -q maths")

        assert console.output == ["Invalid quiz selection!"]


# ============================================================================
# Session lifecycle
# ============================================================================


class TestSessionLifecycle:
    """Test run(), exit and end of input."""

    def test_run_shows_login_help_first(self, session, console):
        session.run()

        assert console.output[0] == "QuizDesk"

    def test_exit_command_stops_loop(self, session, console):
        console.feed("exit", "help")

        assert session.run() == 0
        assert "Exiting QuizDesk." in console.output
        assert list(console.inputs) == ["help"]

    def test_end_of_input_stops_and_flushes(self, session, app, roster_path, admin):
        roster_path.unlink()

        assert session.run() == 0
        assert session.stopped
        assert roster_path.exists()

    def test_failed_final_flush_sets_exit_code(self, session, console, app):
        app.roster.store.save_all = Mock(side_effect=PersistenceError("disk full"))

        assert session.run() == 1
        assert console.output[-1] == "disk full"

    def test_stop_is_idempotent(self, session, app):
        app.roster.store.save_all = Mock()

        session.stop()
        session.stop()

        app.roster.store.save_all.assert_called_once()

    def test_blank_lines_are_ignored(self, session, console):
        session.feed("")
        session.feed("   \t")

        assert console.output == []

    def test_exit_from_logged_in_phase_runs_phase_exit(self, session, console, pupil):
        session.feed("login Bob15 pupilpw")
        phase = session.current_phase
        phase.exit = Mock()

        session.feed("exit")

        phase.exit.assert_called_once()
        assert session.stopped


class TestPhase:
    def test_base_phase_is_abstract(self, session):
        with pytest.raises(TypeError):
            Phase(session)
