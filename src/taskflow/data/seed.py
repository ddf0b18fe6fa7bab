# src/taskflow/data/seed.py

"""Fixed demo dataset loaded once at startup."""

from __future__ import annotations

from datetime import UTC, date, datetime

from ..core.models import Employee, Priority, Project, Status, Task
from ..core.ports import SeedData


def _day(value: str) -> date:
    return date.fromisoformat(value)


def _ts(value: str) -> datetime:
    return datetime.combine(date.fromisoformat(value), datetime.min.time(), tzinfo=UTC)


EMPLOYEES: tuple[Employee, ...] = (
    Employee("emp1", "Alex Johnson", "Frontend Developer", "https://i.pravatar.cc/150?img=1", "alex.johnson@example.com"),
    Employee("emp2", "Samantha Lee", "UX Designer", "https://i.pravatar.cc/150?img=5", "samantha.lee@example.com"),
    Employee("emp3", "Michael Chen", "Backend Developer", "https://i.pravatar.cc/150?img=3", "michael.chen@example.com"),
    Employee("emp4", "Emily Rodriguez", "Project Manager", "https://i.pravatar.cc/150?img=4", "emily.rodriguez@example.com"),
    Employee("emp5", "David Kim", "DevOps Engineer", "https://i.pravatar.cc/150?img=8", "david.kim@example.com"),
    Employee("emp6", "Sophie Taylor", "QA Engineer", "https://i.pravatar.cc/150?img=9", "sophie.taylor@example.com"),
)

PROJECTS: tuple[Project, ...] = (
    Project(
        id="proj1",
        name="Website Redesign",
        description="Redesign the company website with modern UI/UX principles",
        start_date=_day("2023-10-01"),
        end_date=_day("2023-12-15"),
        status=Status.IN_PROGRESS,
        team_ids=("emp1", "emp2", "emp4"),
    ),
    Project(
        id="proj2",
        name="Mobile App Development",
        description="Create a new mobile app for client inventory management",
        start_date=_day("2023-09-15"),
        end_date=_day("2024-01-30"),
        status=Status.IN_PROGRESS,
        team_ids=("emp1", "emp3", "emp4", "emp6"),
    ),
    Project(
        id="proj3",
        name="API Optimization",
        description="Improve API performance and add new endpoints",
        start_date=_day("2023-11-01"),
        end_date=_day("2024-02-15"),
        status=Status.TODO,
        team_ids=("emp3", "emp5"),
    ),
    Project(
        id="proj4",
        name="DevOps Infrastructure",
        description="Set up CI/CD pipeline and cloud infrastructure",
        start_date=_day("2023-08-01"),
        end_date=_day("2023-11-30"),
        status=Status.DONE,
        team_ids=("emp5", "emp3"),
    ),
    Project(
        id="proj5",
        name="Analytics Dashboard",
        description="Create a new analytics dashboard with data visualization",
        start_date=_day("2023-12-01"),
        end_date=_day("2024-03-15"),
        status=Status.TODO,
        team_ids=("emp1", "emp2", "emp4"),
    ),
)


def _task(
    id: str,
    title: str,
    description: str,
    status: Status,
    priority: Priority,
    project_id: str,
    assignee_id: str,
    due: str,
    created: str,
    completed: str | None = None,
) -> Task:
    return Task(
        id=id,
        title=title,
        description=description,
        status=status,
        priority=priority,
        project_id=project_id,
        assignee_id=assignee_id,
        due_date=_day(due),
        created_at=_ts(created),
        completed_at=_ts(completed) if completed else None,
    )


TASKS: tuple[Task, ...] = (
    _task("task1", "Design Homepage Mockup", "Create wireframes and mockups for the new homepage design",
          Status.DONE, Priority.HIGH, "proj1", "emp2", "2023-10-15", "2023-10-01", "2023-10-14"),
    _task("task2", "Implement Homepage Frontend", "Develop HTML/CSS/JS for the approved homepage design",
          Status.IN_PROGRESS, Priority.MEDIUM, "proj1", "emp1", "2023-11-01", "2023-10-16"),
    _task("task3", "Setup React Project Structure", "Initialize the React project and setup basic routing",
          Status.DONE, Priority.HIGH, "proj1", "emp1", "2023-10-10", "2023-10-01", "2023-10-08"),
    _task("task4", "Design User Authentication Flows", "Create wireframes for login, signup, and password recovery",
          Status.REVIEW, Priority.MEDIUM, "proj2", "emp2", "2023-10-20", "2023-09-20"),
    _task("task5", "Implement User Authentication", "Develop backend API endpoints for user authentication",
          Status.IN_PROGRESS, Priority.HIGH, "proj2", "emp3", "2023-11-05", "2023-10-01"),
    _task("task6", "Setup CI/CD Pipeline", "Configure Jenkins for continuous integration and deployment",
          Status.DONE, Priority.HIGH, "proj4", "emp5", "2023-09-15", "2023-08-10", "2023-09-12"),
    _task("task7", "API Performance Testing", "Conduct load testing and identify performance bottlenecks",
          Status.TODO, Priority.MEDIUM, "proj3", "emp3", "2023-11-20", "2023-11-01"),
    _task("task8", "Database Optimization", "Optimize database queries and indexes for better performance",
          Status.TODO, Priority.MEDIUM, "proj3", "emp3", "2023-12-05", "2023-11-01"),
    _task("task9", "QA Testing for Mobile App", "Conduct thorough testing of the mobile app features",
          Status.TODO, Priority.HIGH, "proj2", "emp6", "2024-01-10", "2023-10-15"),
    _task("task10", "Create Analytics Dashboard Wireframes", "Design wireframes for data visualization dashboard",
          Status.TODO, Priority.MEDIUM, "proj5", "emp2", "2023-12-20", "2023-12-01"),
    _task("task11", "Implement Product Page", "Create the product page with filtering and sorting features",
          Status.REVIEW, Priority.MEDIUM, "proj1", "emp1", "2023-11-25", "2023-10-25"),
    _task("task12", "Setup AWS Infrastructure", "Configure AWS services for the application deployment",
          Status.DONE, Priority.HIGH, "proj4", "emp5", "2023-10-20", "2023-09-20", "2023-10-18"),
)


class StaticSeedSource:
    """SeedSource returning the built-in demo dataset."""

    def load(self) -> SeedData:
        return SeedData(employees=EMPLOYEES, projects=PROJECTS, tasks=TASKS)
