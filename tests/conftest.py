"""
Shared pytest setup for lesson-adapt.

Registers the unit/integration/smoke markers (applied by directory) and
provides the engine plus three reference learners used across the suites.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (in-process API)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def engine():
    """Engine bound to the default policy."""
    from lesson_adapt.adaptive import ExplainabilityEngine

    return ExplainabilityEngine()


@pytest.fixture
def algebra_input():
    """Beginner learner, medium confidence, large delta, visual start."""
    from lesson_adapt.adaptive import ExplainInput, LessonStyle

    return ExplainInput(
        topic="Algebra basics",
        prior_knowledge="Basic",
        confidence=3,
        delta=50,
        starting_style=LessonStyle.VISUAL,
    )


@pytest.fixture
def overconfident_input():
    """High confidence but a small learning delta."""
    from lesson_adapt.adaptive import ExplainInput, LessonStyle

    return ExplainInput(
        topic="Fractions",
        prior_knowledge="",
        confidence=5,
        delta=5,
        starting_style=LessonStyle.TEXT,
    )


@pytest.fixture
def underconfident_input():
    """Low confidence but a large learning delta."""
    from lesson_adapt.adaptive import ExplainInput, LessonStyle

    return ExplainInput(
        topic="Photosynthesis",
        prior_knowledge="I'm comfortable with this",
        confidence=1,
        delta=45,
        starting_style=LessonStyle.QUIZ,
    )
