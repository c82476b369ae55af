"""
Default exercise library.

Loaded at startup (and by ``python -m backend.cli seed-exercises``) when the
exercises table is empty.
"""
import logging

from sqlalchemy.orm import Session

from domain.models import DifficultyLevel, ExerciseType, TargetMuscleGroup
from infrastructure.db.exercise_repository import SqlAlchemyExerciseRepository
from infrastructure.db.models import Exercise

logger = logging.getLogger(__name__)

S, C, F = ExerciseType.STRENGTH, ExerciseType.CARDIO, ExerciseType.FLEXIBILITY
B, I, A = DifficultyLevel.BEGINNER, DifficultyLevel.INTERMEDIATE, DifficultyLevel.ADVANCED
M = TargetMuscleGroup

DEFAULT_EXERCISES = [
    # Strength
    ("Barbell Bench Press", "Flat bench press with a barbell", S, M.CHEST, I),
    ("Push-ups", "Bodyweight press for chest, shoulders and triceps", S, M.CHEST, B),
    ("Dumbbell Flyes", "Chest isolation through a wide arc", S, M.CHEST, I),
    ("Conventional Deadlift", "Hip hinge lifting the bar from the floor", S, M.BACK, A),
    ("Pull-ups", "Overhand bodyweight pull to the bar", S, M.BACK, I),
    ("Barbell Row", "Bent over row for upper back thickness", S, M.BACK, I),
    ("Lat Pulldown", "Cable pulldown for lat width", S, M.BACK, B),
    ("Back Squat", "Barbell squat with the bar on the upper back", S, M.QUADRICEPS, I),
    ("Walking Lunges", "Alternating forward lunges", S, M.LEGS, B),
    ("Romanian Deadlift", "Stiff-legged hinge for the hamstrings", S, M.HAMSTRINGS, I),
    ("Hip Thrust", "Loaded hip extension from a bench", S, M.GLUTES, I),
    ("Standing Calf Raises", "Heel raises under load", S, M.CALVES, B),
    ("Overhead Press", "Standing barbell press overhead", S, M.SHOULDERS, I),
    ("Lateral Raises", "Dumbbell raises for the side delts", S, M.SHOULDERS, B),
    ("Barbell Curl", "Standing curl with a barbell", S, M.BICEPS, B),
    ("Triceps Pushdown", "Cable extension for the triceps", S, M.TRICEPS, B),
    ("Wrist Curls", "Forearm flexion with light dumbbells", S, M.FOREARMS, B),
    ("Plank", "Static hold in a push-up position", S, M.CORE, B),
    ("Hanging Leg Raises", "Raising straight legs while hanging", S, M.CORE, A),
    # Cardio
    ("Running", "Steady-state or interval running", C, M.FULL_BODY, B),
    ("Cycling", "Road or stationary bike riding", C, M.LEGS, B),
    ("Rowing Machine", "Ergometer rowing", C, M.FULL_BODY, I),
    ("Jump Rope", "Continuous rope skipping", C, M.FULL_BODY, I),
    ("Burpees", "Squat thrust with a jump", C, M.FULL_BODY, A),
    ("Stair Climber", "Climbing on a stepping machine", C, M.LEGS, I),
    # Flexibility
    ("Hamstring Stretch", "Seated forward reach toward the toes", F, M.HAMSTRINGS, B),
    ("Hip Flexor Stretch", "Half-kneeling lunge stretch", F, M.LEGS, B),
    ("Child Pose", "Kneeling rest stretching the lower back", F, M.BACK, B),
    ("Doorway Chest Stretch", "Forearms on a door frame, lean through", F, M.CHEST, B),
    ("Pigeon Pose", "Deep hip opener for the glutes", F, M.GLUTES, I),
    ("Cross-body Shoulder Stretch", "Arm pulled across the chest", F, M.SHOULDERS, B),
]


def seed_default_exercises(session: Session) -> int:
    """
    Insert the default library if no exercise exists yet.

    Returns:
        Number of exercises inserted (0 if the table was not empty)
    """
    repo = SqlAlchemyExerciseRepository(session)
    if repo.count() > 0:
        logger.info("Exercises already exist in database, skipping seed")
        return 0

    for name, description, exercise_type, muscle_group, difficulty in DEFAULT_EXERCISES:
        session.add(
            Exercise(
                name=name,
                description=description,
                type=exercise_type,
                target_muscle_group=muscle_group,
                difficulty_level=difficulty,
            )
        )
    session.flush()
    logger.info(f"Seeded {len(DEFAULT_EXERCISES)} default exercises")
    return len(DEFAULT_EXERCISES)
