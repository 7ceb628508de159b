import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
import time
from datetime import date
from typing import List, Optional
from pathlib import Path

from studytrack.database import SessionLocal, init_db
from studytrack.crud import (
    create_subject, get_subject, get_subjects,
    create_unit, get_units,
    create_topic, get_topic, get_topics, get_topics_for_subject,
    set_topic_completed, save_topic_content, import_syllabus,
    record_review, get_review_topics,
    create_test, get_test, get_tests, submit_test_result, get_test_results,
    create_task, get_tasks, set_task_completed, delete_task, carry_over_tasks
)
from studytrack.schemas import SubjectCreate, UnitCreate, TopicCreate, StudyTaskCreate, ChatMessageIn
from studytrack.spaced_repetition import ReviewScheduler
from studytrack.progress import build_dashboard, build_parent_report
from studytrack.syllabus_parser import SyllabusParser
from studytrack.content_generator import ContentGenerator
from studytrack.tutor import StudyBuddy
from studytrack.errors import StudyTrackError
from studytrack.logging_config import configure_logging

app = typer.Typer(help="StudyTrack CLI - track syllabus progress and spaced repetition reviews")
console = Console()

DIFFICULTY_STYLE = {"easy": "green", "medium": "yellow", "hard": "red"}


@app.callback()
def main():
    configure_logging()


def _fail(message: str):
    console.print(f"[red]✗[/red] {message}")
    raise typer.Exit(code=1)


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")

@app.command()
def reset_db():
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    from studytrack.database import engine, Base
    import studytrack.models  # noqa: F401
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")

@app.command()
def add_subject(
    name: str = typer.Option(..., prompt="Subject name"),
    color: str = typer.Option("#3B82F6", help="Hex color")
):
    """Create a new subject"""
    db = SessionLocal()
    try:
        subject = create_subject(db, SubjectCreate(name=name, color=color))
        console.print(f"[green]✓[/green] Subject created! ID: {subject.id}")
    finally:
        db.close()

@app.command()
def add_unit(
    subject_id: int = typer.Option(..., prompt="Subject ID"),
    name: str = typer.Option(..., prompt="Unit name")
):
    """Add a unit to a subject"""
    db = SessionLocal()
    try:
        if not get_subject(db, subject_id):
            _fail(f"Subject ID {subject_id} not found")
        sort_order = len(get_units(db, subject_id))
        unit = create_unit(db, UnitCreate(subject_id=subject_id, name=name, sort_order=sort_order))
        console.print(f"[green]✓[/green] Unit created! ID: {unit.id}")
    finally:
        db.close()

@app.command()
def add_topic(
    unit_id: int = typer.Option(..., prompt="Unit ID"),
    name: str = typer.Option(..., prompt="Topic name"),
    difficulty: str = typer.Option("medium", help="easy, medium or hard"),
    interval_days: Optional[float] = typer.Option(None, help="Custom interval (days) for the first review")
):
    """Add a topic to a unit"""
    db = SessionLocal()
    try:
        topic = create_topic(db, TopicCreate(
            unit_id=unit_id,
            name=name,
            difficulty=difficulty,
            revision_interval_days=interval_days
        ))
        console.print(f"[green]✓[/green] Topic created! ID: {topic.id}")
        console.print(f"  Needs {topic.required_reviews} reviews to master")
    except (StudyTrackError, ValueError) as e:
        _fail(str(e))
    finally:
        db.close()

@app.command("import-syllabus")
def import_syllabus_file(
    file_path: str = typer.Option(..., prompt="Syllabus file path (.csv, .xlsx, .txt or .md)")
):
    """Import subjects, units and topics from a syllabus file"""
    if not Path(file_path).exists():
        _fail(f"File not found: {file_path}")

    db = SessionLocal()
    try:
        console.print("[yellow]Parsing syllabus...[/yellow]")
        syllabus = SyllabusParser().auto_parse(file_path)
        subjects = import_syllabus(db, syllabus)

        console.print(f"[green]✓[/green] Imported {len(subjects)} subjects")
        for parsed in syllabus.subjects:
            topic_count = sum(len(u.topics) for u in parsed.units)
            console.print(f"  {parsed.name}: {len(parsed.units)} units, {topic_count} topics")
    except (StudyTrackError, ValueError) as e:
        _fail(str(e))
    finally:
        db.close()

@app.command()
def list_topics(subject_id: Optional[int] = typer.Option(None, help="Only topics of this subject")):
    """List topics with their review state"""
    db = SessionLocal()
    try:
        topics = get_topics_for_subject(db, subject_id) if subject_id else get_topics(db)
        if not topics:
            console.print("[yellow]No topics found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Topic", style="green")
        table.add_column("Done", justify="center")
        table.add_column("Difficulty")
        table.add_column("Reviews", justify="right")
        table.add_column("Next Review", style="cyan")

        for topic in topics:
            style = DIFFICULTY_STYLE.get(topic.difficulty, "white")
            table.add_row(
                str(topic.id),
                topic.name[:50],
                "✓" if topic.is_completed else "",
                f"[{style}]{topic.difficulty}[/{style}]",
                f"{topic.review_count}/{ReviewScheduler.required_reviews(topic.difficulty)}",
                ReviewScheduler.time_until_review(topic.next_review).text
            )

        console.print(table)
    finally:
        db.close()

@app.command()
def complete_topic(
    topic_id: int = typer.Option(..., prompt="Topic ID"),
    undo: bool = typer.Option(False, help="Mark the topic as not completed")
):
    """Mark a topic as studied"""
    db = SessionLocal()
    try:
        topic = set_topic_completed(db, topic_id, completed=not undo)
        if not topic:
            _fail(f"Topic ID {topic_id} not found")
        status = "not completed" if undo else "completed"
        console.print(f"[green]✓[/green] {topic.name} marked {status}")
        console.print(f"  Subject progress: {topic.unit.subject.progress}%")
    finally:
        db.close()

def _review_table(title: str, rows, show_status: bool = True) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Subject", style="cyan")
    table.add_column("Unit")
    table.add_column("Topic", style="green")
    table.add_column("Reviews", justify="right")
    if show_status:
        table.add_column("Status")

    for topic, subject_name, unit_name in rows:
        cells = [
            str(topic.id),
            subject_name,
            unit_name,
            topic.name[:40],
            f"{topic.review_count}/{ReviewScheduler.required_reviews(topic.difficulty)}"
        ]
        if show_status:
            status = ReviewScheduler.time_until_review(topic.next_review)
            cells.append(f"[red]{status.text}[/red]" if status.overdue else status.text)
        table.add_row(*cells)
    return table

@app.command()
def review_list():
    """Show topics due for review, upcoming reviews and mastered topics"""
    db = SessionLocal()
    try:
        rows = get_review_topics(db)
        meta = {topic.id: (subject_name, unit_name) for topic, subject_name, unit_name in rows}
        buckets = ReviewScheduler.classify([topic for topic, _, _ in rows])

        def with_meta(topics):
            return [(t, *meta[t.id]) for t in topics]

        console.print(_review_table(f"Due for Review ({len(buckets.due)})", with_meta(buckets.due)))
        console.print(_review_table(f"Upcoming ({len(buckets.upcoming)})", with_meta(buckets.upcoming)))
        console.print(_review_table(f"Mastered ({len(buckets.mastered)})", with_meta(buckets.mastered), show_status=False))
    finally:
        db.close()

@app.command()
def review(
    topic_id: int = typer.Option(..., prompt="Topic ID"),
    difficulty: str = typer.Option(..., prompt="How difficult was it? (easy/medium/hard)"),
    confidence: Optional[str] = typer.Option(None, help="Confidence level (low/medium/high)")
):
    """Complete a review session for a topic"""
    db = SessionLocal()
    try:
        result = record_review(db, topic_id, difficulty.strip().lower(), confidence)

        if result.newly_mastered:
            console.print("[bold green]🎉 Topic Mastered![/bold green]")
            console.print(f"  Completed {result.review_count}/{result.required_reviews} reviews")
        else:
            console.print("[green]✓[/green] Review complete")
            console.print(f"  Reviews: {result.review_count}/{result.required_reviews}")
        console.print(f"  Next review: {result.next_review.strftime('%b %d, %Y %H:%M')}")
    except StudyTrackError as e:
        _fail(str(e))
    finally:
        db.close()

@app.command()
def dashboard():
    """Show study progress summary"""
    db = SessionLocal()
    try:
        summary = build_dashboard(get_subjects(db), get_topics(db))

        if summary.show_revision_reminder:
            message = f"{summary.due_today} topic{'s' if summary.due_today != 1 else ''} due for review"
            if summary.urgent:
                message += f" ({summary.urgent} overdue by more than a day)"
            console.print(Panel(message, title="Revision Reminder", border_style="red" if summary.urgent else "yellow"))

        console.print(f"\n[cyan]Statistics:[/cyan]")
        console.print(f"  Subjects: {summary.total_subjects}")
        console.print(f"  Topics completed: {summary.completed_topics}/{summary.total_topics} ({summary.overall_progress}%)")
        console.print(f"  Due for review: {summary.due_today}")
        console.print(f"  Topics mastered: {summary.mastered}")

        table = Table(title="Last 7 Days", show_header=True, header_style="bold magenta")
        table.add_column("Day", style="cyan")
        table.add_column("Topics", justify="right")
        table.add_column("Reviews", justify="right")
        for day in summary.weekly_activity:
            table.add_row(day.day, str(day.topics), str(day.reviews))
        console.print(table)
    finally:
        db.close()

@app.command()
def parent_report():
    """Read-only progress report for parents"""
    db = SessionLocal()
    try:
        report = build_parent_report(get_subjects(db), get_topics(db), test_results=get_test_results(db))

        console.print(f"\n[bold]{report.headline}[/bold]\n")
        console.print(f"  Topics completed this week: {report.topics_completed_this_week}")
        console.print(f"  Reviews this week: {report.reviews_this_week}")
        console.print(f"  Study streak: {report.study_streak} days")
        console.print(f"  Overall: {report.completed_topics} of {report.total_topics} topics completed ({report.overall_progress}%)")
        console.print(f"  Due today: {report.due_today} (urgent: {report.urgent})")
        console.print(f"  Tests this week: {report.tests_completed} (average score: {report.average_test_score}%)")
        console.print(
            f"  Confidence: low {report.confidence['low']}, "
            f"medium {report.confidence['medium']}, high {report.confidence['high']}"
        )

        if report.subjects:
            table = Table(title="Subject Progress", show_header=True, header_style="bold magenta")
            table.add_column("Subject", style="cyan")
            table.add_column("Progress", justify="right")
            for subject in report.subjects:
                table.add_row(subject.name, f"{subject.progress}%")
            console.print(table)
    finally:
        db.close()

@app.command()
def generate_content(topic_id: int = typer.Option(..., prompt="Topic ID")):
    """Generate AI summary and quiz for a topic"""
    db = SessionLocal()
    try:
        topic = get_topic(db, topic_id)
        if not topic:
            _fail(f"Topic ID {topic_id} not found")

        console.print("[yellow]Generating content (this may take a moment)...[/yellow]")
        content = ContentGenerator().generate_topic_content(
            topic.unit.subject.name, topic.unit.name, topic.name
        )
        save_topic_content(db, topic_id, content)

        console.print(Panel(content.summary, title=topic.name))
        console.print(f"[green]✓[/green] Saved summary and {len(content.quiz)} quiz questions")
    except StudyTrackError as e:
        _fail(str(e))
    finally:
        db.close()

@app.command()
def generate_test(
    subject_id: int = typer.Option(..., prompt="Subject ID"),
    title: Optional[str] = typer.Option(None, help="Test title"),
    count: Optional[int] = typer.Option(None, help="Number of questions (default: 3 per topic, max 15)"),
    time_limit: Optional[int] = typer.Option(None, help="Time limit in minutes")
):
    """Generate and save an MCQ practice test for a subject's completed topics"""
    db = SessionLocal()
    try:
        subject = get_subject(db, subject_id)
        if not subject:
            _fail(f"Subject ID {subject_id} not found")

        topics = [t for t in get_topics_for_subject(db, subject_id) if t.is_completed]
        if not topics:
            _fail("Complete some topics first to generate a test")

        console.print("[yellow]Generating questions (this may take a moment)...[/yellow]")
        questions = ContentGenerator().generate_test(
            subject.name, [t.name for t in topics], count or min(15, len(topics) * 3)
        )
        test = create_test(
            db,
            title or f"{subject.name} practice test",
            questions,
            topic_ids=[t.id for t in topics],
            subject_id=subject_id,
            time_limit_minutes=time_limit
        )
        console.print(f"[green]✓[/green] Test created! ID: {test.id}")
        console.print(f"  {len(test.questions)} questions generated")
    except StudyTrackError as e:
        _fail(str(e))
    finally:
        db.close()

@app.command()
def list_tests():
    """List saved practice tests with their latest score"""
    db = SessionLocal()
    try:
        tests = get_tests(db)
        if not tests:
            console.print("[yellow]No tests found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Title", style="green")
        table.add_column("Questions", justify="right")
        table.add_column("Attempts", justify="right")
        table.add_column("Latest Score", style="cyan")

        for test in tests:
            latest = test.results[0] if test.results else None
            table.add_row(
                str(test.id),
                test.title,
                str(len(test.questions)),
                str(len(test.results)),
                f"{latest.score}/{latest.total_questions}" if latest else "-"
            )
        console.print(table)
    finally:
        db.close()

def _ask_answer(number: int, option_count: int) -> Optional[int]:
    letters = "".join(chr(65 + j) for j in range(option_count))
    while True:
        answer = typer.prompt(f"Answer {number} ({letters}, blank to skip)", default="", show_default=False)
        answer = answer.strip().upper()
        if not answer:
            return None
        if len(answer) == 1 and answer in letters:
            return letters.index(answer)
        console.print(f"[red]Choose one of {', '.join(letters)}[/red]")

@app.command()
def take_test(test_id: int = typer.Option(..., prompt="Test ID")):
    """Answer a saved practice test and record the score"""
    db = SessionLocal()
    try:
        test = get_test(db, test_id)
        if not test:
            _fail(f"Test ID {test_id} not found")
        if not test.questions:
            _fail("No questions found for this test")
        if test.time_limit_minutes:
            console.print(f"[yellow]Time limit: {test.time_limit_minutes} minutes[/yellow]")

        started = time.monotonic()
        answers = []
        for i, q in enumerate(test.questions, 1):
            console.print(f"\n[bold]{i}. {q.question}[/bold] [dim]({q.difficulty})[/dim]")
            for j, option in enumerate(q.options):
                console.print(f"   {chr(65 + j)}. {option}")
            answers.append(_ask_answer(i, len(q.options)))

        result = submit_test_result(db, test_id, answers, time_taken_seconds=int(time.monotonic() - started))
        percent = round(result.score / result.total_questions * 100)
        console.print(Panel(
            f"Score: {result.score}/{result.total_questions} ({percent}%)",
            title=test.title,
            border_style="green" if percent >= 70 else "yellow"
        ))

        for i, (q, answer) in enumerate(zip(test.questions, result.answers), 1):
            if answer == q.correct_index:
                continue
            console.print(f"[red]✗[/red] {i}. Correct answer: {chr(65 + q.correct_index)}. {q.options[q.correct_index]}")
            if q.explanation:
                console.print(f"   [dim]{q.explanation}[/dim]")
    except StudyTrackError as e:
        _fail(str(e))
    finally:
        db.close()

@app.command()
def add_task(
    title: str = typer.Option(..., prompt="Task"),
    on: Optional[str] = typer.Option(None, help="Scheduled date (YYYY-MM-DD), defaults to today"),
    subject_id: Optional[int] = typer.Option(None, help="Related subject ID")
):
    """Schedule a study task in the planner"""
    db = SessionLocal()
    try:
        scheduled_date = date.fromisoformat(on) if on else date.today()
        task = create_task(db, StudyTaskCreate(title=title, scheduled_date=scheduled_date, subject_id=subject_id))
        console.print(f"[green]✓[/green] Task scheduled for {task.scheduled_date.isoformat()}! ID: {task.id}")
    except ValueError as e:
        _fail(str(e))
    finally:
        db.close()

@app.command()
def tasks(show_all: bool = typer.Option(False, "--all", help="Show every task, not just today's")):
    """Show planner tasks, carrying unfinished ones over to today"""
    db = SessionLocal()
    try:
        moved = carry_over_tasks(db)
        if moved:
            console.print(f"[yellow]{len(moved)} incomplete task(s) moved to today[/yellow]")

        task_list = get_tasks(db) if show_all else get_tasks(db, date.today())
        if not task_list:
            console.print("[yellow]No tasks scheduled[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Task", style="green")
        table.add_column("Subject")
        table.add_column("Done", justify="center")

        for task in task_list:
            label = task.title
            if task.carried_over_from:
                label += f" [dim](from {task.carried_over_from.isoformat()})[/dim]"
            table.add_row(
                str(task.id),
                task.scheduled_date.isoformat(),
                label,
                task.subject.name if task.subject else "",
                "✓" if task.is_completed else ""
            )
        console.print(table)
    finally:
        db.close()

@app.command()
def complete_task(
    task_id: int = typer.Option(..., prompt="Task ID"),
    undo: bool = typer.Option(False, help="Mark the task as not done")
):
    """Tick off a planner task"""
    db = SessionLocal()
    try:
        task = set_task_completed(db, task_id, completed=not undo)
        if not task:
            _fail(f"Task ID {task_id} not found")
        console.print(f"[green]✓[/green] {task.title} marked {'not done' if undo else 'done'}")
    finally:
        db.close()

@app.command()
def remove_task(task_id: int = typer.Option(..., prompt="Task ID")):
    """Delete a planner task"""
    db = SessionLocal()
    try:
        if not delete_task(db, task_id):
            _fail(f"Task ID {task_id} not found")
        console.print("[green]✓[/green] Task deleted")
    finally:
        db.close()


@app.command()
def chat(image_url: Optional[str] = typer.Option(None, help="Image to discuss in the first message")):
    """Chat with the AI study buddy (empty line to quit)"""
    try:
        buddy = StudyBuddy()
    except StudyTrackError as e:
        _fail(str(e))

    history: List[ChatMessageIn] = []
    while True:
        text = typer.prompt("You", default="", show_default=False)
        if not text.strip():
            break
        history.append(ChatMessageIn(role="user", content=text, image_url=image_url))
        image_url = None

        try:
            answer = buddy.reply(history)
        except StudyTrackError as e:
            _fail(str(e))
        history.append(ChatMessageIn(role="assistant", content=answer))
        console.print(f"[bold cyan]Buddy:[/bold cyan] {answer}\n")

if __name__ == "__main__":
    app()
