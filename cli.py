import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table
from typing import Optional, List
from datetime import datetime, date

from studyhub.database import SessionLocal, init_db
from studyhub.crud import (
    create_user, get_user, get_user_by_username,
    get_syllabi_by_user, get_study_plans_by_user,
    get_study_session, update_study_session,
    get_summaries_by_user, get_chat_messages_by_user,
    create_task, get_tasks_by_user, get_task, update_task, delete_task,
    create_focus_session, get_focus_session, get_focus_sessions_by_user, update_focus_session
)
from studyhub.schemas import (
    UserCreate, StudyPreferences, SummaryFormat,
    TaskCreate, TaskPriority, TaskCategory, FocusSessionCreate
)
from studyhub.document_loader import DocumentLoader
from studyhub.generators import StudyAssistant
from studyhub.logging_config import setup_logging
from studyhub.workflows import (
    upload_syllabus as upload_syllabus_flow,
    create_plan_from_syllabus,
    summarize_and_save,
    chat_with_tutor,
    default_plan_window
)

app = typer.Typer(help="StudyHub CLI - syllabus parsing, AI study plans, summaries and tutoring")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs, including raw AI output")):
    setup_logging("DEBUG" if verbose else None)


def parse_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def split_csv(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    return [v.strip() for v in value.split(",") if v.strip()]


def fail(message: str):
    console.print(f"[red]✗[/red] {message}")
    raise typer.Exit(code=1)


def require_user(db, user_id: int):
    user = get_user(db, user_id)
    if not user:
        fail(f"User ID {user_id} not found")
    return user


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

    from studyhub.database import engine, Base
    import studyhub.models  # noqa: F401
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    Base.metadata.create_all(bind=engine)
    console.print("[green]✓[/green] Database reset complete! All data deleted.")

@app.command("create-user")
def create_user_command(username: str = typer.Option(..., prompt="Username")):
    """Create a new user"""
    db = SessionLocal()
    try:
        if get_user_by_username(db, username):
            fail(f"Username '{username}' is already taken")
        user = create_user(db, UserCreate(username=username))
        console.print(f"[green]✓[/green] User created successfully! User ID: {user.id}")
    except typer.Exit:
        raise
    except Exception as e:
        fail(f"Error: {str(e)}")
    finally:
        db.close()


@app.command()
def upload_syllabus(
    user_id: int = typer.Option(..., prompt="User ID"),
    file_path: str = typer.Option(..., prompt="Syllabus file path (.pdf, .txt or .md)")
):
    """Upload a syllabus and extract its structure with AI"""
    db = SessionLocal()
    try:
        require_user(db, user_id)
        title, text = DocumentLoader.load(file_path)
        console.print(f"[yellow]Parsing syllabus '{title}' ({len(text)} characters)...[/yellow]")

        syllabus = upload_syllabus_flow(db, StudyAssistant(), user_id, title, text)
        parsed = syllabus.parsed_content

        console.print(f"[green]✓[/green] Syllabus uploaded successfully! ID: {syllabus.id}")
        console.print(f"  Course: {syllabus.course_name}")
        console.print(f"  Instructor: {parsed['instructor']}")
        console.print(f"  Topics: {len(parsed['topics'])}")
        for exam in parsed["examDates"]:
            console.print(f"  Exam: {exam['name']} on {exam['date']}")
    except typer.Exit:
        raise
    except Exception as e:
        fail(f"Error: {str(e)}")
    finally:
        db.close()

@app.command()
def list_syllabi(user_id: int):
    """List uploaded syllabi"""
    db = SessionLocal()
    try:
        syllabi = get_syllabi_by_user(db, user_id)
        if not syllabi:
            console.print(f"[yellow]No syllabi found for user {user_id}[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Title", style="green")
        table.add_column("Course", style="yellow")
        table.add_column("Topics", justify="right")
        table.add_column("Uploaded", style="blue")

        for syllabus in syllabi:
            topics = (syllabus.parsed_content or {}).get("topics", [])
            table.add_row(
                str(syllabus.id),
                syllabus.title,
                syllabus.course_name or "-",
                str(len(topics)),
                syllabus.created_at.strftime("%Y-%m-%d %H:%M")
            )

        console.print(table)
    finally:
        db.close()

@app.command()
def generate_plan(
    user_id: int = typer.Option(..., prompt="User ID"),
    syllabus_id: int = typer.Option(..., prompt="Syllabus ID"),
    start_date: Optional[str] = typer.Option(None, help="Plan start date (YYYY-MM-DD). Default: today"),
    end_date: Optional[str] = typer.Option(None, help="Plan end date (YYYY-MM-DD). Default: start + 13 days"),
    hours_per_day: Optional[float] = typer.Option(None, help="Hours available per day"),
    study_times: Optional[str] = typer.Option(None, help="Preferred study times (comma-separated, e.g., 'morning,evening')"),
    excluded_days: Optional[str] = typer.Option(None, help="Days to skip (comma-separated, e.g., 'Saturday,Sunday')")
):
    """Generate a study plan from an uploaded syllabus"""
    db = SessionLocal()
    try:
        require_user(db, user_id)

        default_start, default_end = default_plan_window()
        start = parse_date(start_date) if start_date else default_start
        end = parse_date(end_date) if end_date else default_end
        if end < start:
            fail("End date must not be before start date")

        preferences = StudyPreferences(
            start_date=start,
            end_date=end,
            hours_per_day=hours_per_day,
            preferred_study_times=split_csv(study_times),
            excluded_days=split_csv(excluded_days)
        )

        console.print(f"\n[bold]Generating plan for {start} to {end}...[/bold]")
        console.print("[yellow]Calling the AI planner (this may take a moment)...[/yellow]")
        plan = create_plan_from_syllabus(db, StudyAssistant(), user_id, syllabus_id, preferences)

        console.print(f"\n[green]✓[/green] [bold]{plan.title}[/bold] (plan ID: {plan.id})\n")
        if plan.description:
            console.print(f"{plan.description}\n")
        console.print(sessions_table(plan.sessions))
    except typer.Exit:
        raise
    except Exception as e:
        fail(f"Error: {str(e)}")
    finally:
        db.close()

def sessions_table(sessions) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Date", style="cyan", width=12)
    table.add_column("Session", style="green")
    table.add_column("Description", style="yellow")
    table.add_column("Duration", style="blue", justify="right")
    table.add_column("Done", justify="center")

    for session in sessions:
        table.add_row(
            str(session.id),
            session.date.strftime("%Y-%m-%d"),
            session.title,
            session.description or "",
            f"{session.duration} min",
            "✓" if session.completed else ""
        )
    return table

@app.command()
def view_plans(user_id: int):
    """View generated study plans with their sessions"""
    db = SessionLocal()
    try:
        plans = get_study_plans_by_user(db, user_id)
        if not plans:
            console.print(f"[yellow]No plans found for user {user_id}[/yellow]")
            return

        for plan in plans:
            done = sum(1 for s in plan.sessions if s.completed)
            console.print(f"\n[bold]{plan.title}[/bold] (ID: {plan.id})")
            console.print(f"{plan.start_date} to {plan.end_date} - {done}/{len(plan.sessions)} sessions completed")
            console.print(sessions_table(plan.sessions))
    finally:
        db.close()

@app.command()
def complete_session(
    session_id: int,
    undo: bool = typer.Option(False, "--undo", help="Mark the session as not completed")
):
    """Mark a study session as completed"""
    db = SessionLocal()
    try:
        if not get_study_session(db, session_id):
            fail(f"Study session {session_id} not found")
        session = update_study_session(db, session_id, {"completed": not undo})
        state = "not completed" if undo else "completed"
        console.print(f"[green]✓[/green] Session '{session.title}' marked {state}")
    finally:
        db.close()


@app.command()
def summarize(
    user_id: int = typer.Option(..., prompt="User ID"),
    file_path: Optional[str] = typer.Option(None, help="File to summarize (.pdf, .txt or .md)"),
    text: Optional[str] = typer.Option(None, help="Text to summarize"),
    title: Optional[str] = typer.Option(None, help="Summary title"),
    format: SummaryFormat = typer.Option(SummaryFormat.bullet_points, help="Summary format")
):
    """Summarize study material"""
    db = SessionLocal()
    try:
        require_user(db, user_id)
        if file_path:
            file_title, content = DocumentLoader.load(file_path)
            title = title or file_title
        elif text:
            content = text
        else:
            fail("No content or file provided")

        console.print("[yellow]Summarizing...[/yellow]")
        summary = summarize_and_save(db, StudyAssistant(), user_id, content, title, format)

        console.print(f"\n[green]✓[/green] [bold]{summary.title}[/bold] (ID: {summary.id})\n")
        console.print(Markdown(summary.summary))
    except typer.Exit:
        raise
    except Exception as e:
        fail(f"Error: {str(e)}")
    finally:
        db.close()

@app.command()
def list_summaries(user_id: int):
    """List saved summaries"""
    db = SessionLocal()
    try:
        summaries = get_summaries_by_user(db, user_id)
        if not summaries:
            console.print(f"[yellow]No summaries found for user {user_id}[/yellow]")
            return

        for summary in summaries:
            console.print(f"\n[bold]{summary.title}[/bold] (ID: {summary.id}, {summary.created_at.strftime('%Y-%m-%d %H:%M')})")
            console.print(Markdown(summary.summary))
    finally:
        db.close()


@app.command()
def chat(
    user_id: int = typer.Option(..., prompt="User ID"),
    message: str = typer.Option(..., prompt="Your question"),
    reference_file: Optional[str] = typer.Option(None, help="File with reference content for the tutor")
):
    """Ask the AI tutor a question"""
    db = SessionLocal()
    try:
        require_user(db, user_id)
        reference_content = None
        if reference_file:
            _, reference_content = DocumentLoader.load(reference_file)

        _, ai_message = chat_with_tutor(db, StudyAssistant(), user_id, message, reference_content)
        console.print("\n[bold cyan]Tutor:[/bold cyan]")
        console.print(Markdown(ai_message.content))
    except typer.Exit:
        raise
    except Exception as e:
        fail(f"Error: {str(e)}")
    finally:
        db.close()

@app.command()
def chat_history(user_id: int):
    """Show the conversation with the AI tutor"""
    db = SessionLocal()
    try:
        messages = get_chat_messages_by_user(db, user_id)
        if not messages:
            console.print(f"[yellow]No chat messages for user {user_id}[/yellow]")
            return

        for msg in messages:
            speaker = "[bold green]You:[/bold green]" if msg.is_user_message else "[bold cyan]Tutor:[/bold cyan]"
            console.print(speaker)
            console.print(Markdown(msg.content))
    finally:
        db.close()


@app.command()
def add_task(
    user_id: int = typer.Option(..., prompt="User ID"),
    title: str = typer.Option(..., prompt="Task title"),
    description: Optional[str] = typer.Option(None, help="Task description"),
    due: Optional[str] = typer.Option(None, help="Due date (YYYY-MM-DD)"),
    priority: TaskPriority = typer.Option(TaskPriority.medium, help="Task priority"),
    category: TaskCategory = typer.Option(TaskCategory.study, help="Task category")
):
    """Add a task"""
    db = SessionLocal()
    try:
        require_user(db, user_id)
        due_date = datetime.strptime(due, "%Y-%m-%d") if due else None
        task = create_task(db, TaskCreate(
            user_id=user_id,
            title=title,
            description=description,
            due_date=due_date,
            priority=priority,
            category=category
        ))
        console.print(f"[green]✓[/green] Task created! ID: {task.id}")
    except typer.Exit:
        raise
    except Exception as e:
        fail(f"Error: {str(e)}")
    finally:
        db.close()

@app.command()
def list_tasks(
    user_id: int,
    pending: bool = typer.Option(False, "--pending", help="Only show tasks that are not completed")
):
    """List tasks"""
    db = SessionLocal()
    try:
        tasks = get_tasks_by_user(db, user_id, include_completed=not pending)
        if not tasks:
            console.print(f"[yellow]No tasks found for user {user_id}[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Title", style="green")
        table.add_column("Due", style="yellow")
        table.add_column("Priority")
        table.add_column("Category")
        table.add_column("Done", justify="center")

        for task in tasks:
            table.add_row(
                str(task.id),
                task.title,
                task.due_date.strftime("%Y-%m-%d") if task.due_date else "-",
                task.priority,
                task.category,
                "✓" if task.completed else ""
            )

        console.print(table)
    finally:
        db.close()

@app.command()
def complete_task(task_id: int):
    """Mark a task as completed"""
    db = SessionLocal()
    try:
        if not get_task(db, task_id):
            fail(f"Task {task_id} not found")
        task = update_task(db, task_id, {"completed": True})
        console.print(f"[green]✓[/green] Task '{task.title}' completed")
    finally:
        db.close()

@app.command("delete-task")
def delete_task_command(task_id: int):
    """Delete a task"""
    db = SessionLocal()
    try:
        if not delete_task(db, task_id):
            fail(f"Task {task_id} not found")
        console.print(f"[green]✓[/green] Task {task_id} deleted")
    finally:
        db.close()


@app.command()
def start_focus(
    user_id: int = typer.Option(..., prompt="User ID"),
    duration: int = typer.Option(25, help="Focus duration in minutes"),
    task_id: Optional[int] = typer.Option(None, help="Task to focus on")
):
    """Start a focus session"""
    db = SessionLocal()
    try:
        require_user(db, user_id)
        if task_id is not None and not get_task(db, task_id):
            fail(f"Task {task_id} not found")
        focus = create_focus_session(db, FocusSessionCreate(user_id=user_id, duration=duration, task_id=task_id))
        console.print(f"[green]✓[/green] Focus session {focus.id} started: {focus.duration} minutes")
    except typer.Exit:
        raise
    except Exception as e:
        fail(f"Error: {str(e)}")
    finally:
        db.close()

@app.command()
def end_focus(focus_id: int):
    """End a running focus session"""
    db = SessionLocal()
    try:
        focus = get_focus_session(db, focus_id)
        if not focus:
            fail(f"Focus session {focus_id} not found")
        if focus.end_time:
            fail(f"Focus session {focus_id} already ended")
        focus = update_focus_session(db, focus_id, {"end_time": datetime.utcnow()})
        minutes = int((focus.end_time - focus.start_time).total_seconds() // 60)
        console.print(f"[green]✓[/green] Focus session ended after {minutes} of {focus.duration} minutes")
    finally:
        db.close()

@app.command()
def list_focus(user_id: int):
    """List focus sessions"""
    db = SessionLocal()
    try:
        sessions = get_focus_sessions_by_user(db, user_id)
        if not sessions:
            console.print(f"[yellow]No focus sessions for user {user_id}[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Started", style="green")
        table.add_column("Ended", style="yellow")
        table.add_column("Planned", style="blue", justify="right")
        table.add_column("Task")

        for focus in sessions:
            table.add_row(
                str(focus.id),
                focus.start_time.strftime("%Y-%m-%d %H:%M"),
                focus.end_time.strftime("%H:%M") if focus.end_time else "running",
                f"{focus.duration} min",
                focus.task.title if focus.task else "-"
            )

        console.print(table)
    finally:
        db.close()

if __name__ == "__main__":
    app()
