from planner_service import PlannerService
from settings_schema import load_settings


def seed(service: PlannerService) -> bool:
    """Fill an empty planner with a sample week. Returns False if not empty."""
    if service.exercises.get_all_exercises() or service.workouts.get_all_workouts():
        return False

    service.create_strength_exercise(
        "Bench Press", 4, 10, 2.5, 1.5, "Barbell", "Chest & Shoulders"
    )
    service.create_strength_exercise(
        "Dumbbell Curl", 3, 12, 2.0, 1.0, "Dumbbell", "Arms"
    )
    service.create_strength_exercise("Squat", 5, 5, 3.0, 2.0, "Barbell", "Legs")
    service.create_strength_exercise(
        "Plank Hold", 3, 1, 45.0, 0.5, "Bodyweight", "Core"
    )
    service.create_endurance_exercise("Easy Run", 30.0, "Treadmill", "Lower Body")
    service.create_interval_exercise("Rowing Sprints", 30.0, 15.0, 10, "Machine", "Back")

    service.create_workout("Upper Body Day", ["Bench Press", "Dumbbell Curl"])
    service.create_workout("Leg Day", ["Squat", "Plank Hold"])
    service.create_workout("Conditioning", ["Easy Run", "Rowing Sprints"])

    service.schedule_workout(0, "Upper Body Day")
    service.schedule_workout(2, "Leg Day")
    service.schedule_workout(4, "Conditioning")
    service.schedule_workout(5, "Upper Body Day")
    return True


if __name__ == "__main__":
    settings = load_settings()
    service = PlannerService()
    service.load(settings.data_path)
    if seed(service):
        service.save(settings.data_path)
        print("Seed data inserted")
    else:
        print("Planner already contains data")
