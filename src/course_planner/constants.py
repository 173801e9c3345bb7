"""Constants for course planning."""

# 60 minute class + 10 minute break
DEFAULT_COURSE_DURATION_MINUTES = 70

MINUTES_PER_DAY = 1440

DEFAULT_MAX_SOLUTIONS = 10

# Solutions computed per alternative probe
ALTERNATIVE_SOLUTION_LIMIT = 5

# Extra courses per day tried when looking for alternatives
MAX_COURSES_PER_DAY_RELAXATIONS = [1, 2]

# Extra gap hours tried when looking for alternatives
MAX_GAP_RELAXATIONS = [2, 4, 6]

# Extra gap hours probed for a relax_constraint hint
MAX_GAP_HINT_RELAXATION = 2

# Additional slots named in an add_slots hint
MAX_SUGGESTED_SLOTS = 3

NO_SOLUTION_REASON = "No valid solution found"
INFEASIBLE_REASON = "No feasible solution with current constraints"

# Hint ordering, lower first
HINT_PRIORITIES = {
    "add_slots": 1,
    "reduce_multiplicity": 2,
    "relax_constraint": 3,
    "remove_course": 4,
}
UNKNOWN_HINT_PRIORITY = 5

# Request keys that are accepted but never enforced
IGNORED_REQUEST_FIELDS = [
    "minEmptySlotsBetweenCourses",
    "selectedDays",
    "timeRange",
    "pairOnlyFilters",
    "hasPair",
]
