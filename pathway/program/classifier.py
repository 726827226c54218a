"""Rule-based habit classifier.

Every category holds an ordered decision list. A rule matches when any of
its ``(question, choices)`` conditions holds; the first matching rule wins
and a rule without conditions always matches. Rule order is significant
for answers that satisfy more than one rule.
"""
from dataclasses import dataclass
from typing import Mapping, Optional

CATEGORIES = ("sleep", "calories", "protein", "training", "lifestyle")

NO_HABIT_IDENTIFIED = (
    "No specific habit identified. Try reviewing your answers and consider what feels most impactful to you."
)


@dataclass(frozen=True)
class Rule:
    text: str
    when: tuple[tuple[str, frozenset[str]], ...] = ()

    def matches(self, answers: Mapping[str, Optional[str]]) -> bool:
        if not self.when:
            return True
        return any(answers.get(question) in choices for question, choices in self.when)


def _any(**conditions: str) -> tuple[tuple[str, frozenset[str]], ...]:
    # q1="bc" means q1 is 'b' or 'c'
    return tuple((question, frozenset(choices)) for question, choices in conditions.items())


@dataclass(frozen=True)
class Question:
    key: str
    text: str
    options: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class Category:
    key: str
    title: str
    description: str
    questions: tuple[Question, ...]


RULES: dict[str, tuple[Rule, ...]] = {
    "sleep": (
        Rule(
            "Creating a more consistent pre-sleep routine, reducing screen time before bed, "
            "and setting a stricter bedtime.",
            _any(q1="c", q2="b", q3="c"),
        ),
        Rule(
            "Improving bedtime consistency and ensuring your wind-down routine is truly relaxing.",
            _any(q1="b", q2="c", q3="b"),
        ),
        Rule("Your sleep habits seem solid! Consider focusing on another area for even greater health benefits."),
    ),
    "calories": (
        Rule(
            "Increasing awareness of calorie intake by tracking or mindful portion control, "
            "especially to avoid eating past fullness.",
            _any(q2="c", q1="c"),
        ),
        Rule(
            "Developing non-food-related strategies to manage stress and boredom to reduce unplanned snacking.",
            _any(q3="bc"),
        ),
        Rule("Your calorie awareness is strong! Perhaps a different category holds more opportunity for improvement."),
    ),
    "protein": (
        Rule(
            "Focusing on including a protein source in every meal and distributing it more evenly "
            "throughout the day.",
            _any(q1="c", q2="b"),
        ),
        Rule("Making it a goal to add a quality protein source to one more meal each day.", _any(q1="b")),
        Rule("Your protein habits appear to be well-structured. Great job!"),
    ),
    "training": (
        Rule(
            "Implementing a structured plan for progressive overload to ensure workouts continue "
            "to drive adaptation.",
            _any(q1="c"),
        ),
        Rule(
            "Improving workout consistency by addressing the root cause of missed sessions "
            "(time, motivation, etc.).",
            _any(q2="cb"),
        ),
        Rule(
            "Transitioning from 'going by feel' to a more structured training program for more "
            "predictable progress.",
            _any(q1="b"),
        ),
        Rule("Your training approach seems consistent and progressive. Keep up the great work!"),
    ),
    "lifestyle": (
        Rule(
            "Developing proactive stress management techniques (like walks or meditation) instead of "
            "relying on reactive distractions like food or entertainment.",
            _any(q1="cb"),
        ),
        Rule(
            "Setting clear boundaries for non-work screen time to reclaim more time for other "
            "fulfilling activities.",
            _any(q2="c"),
        ),
        Rule("Your lifestyle guardrails seem to be in a good place!"),
    ),
}

QUESTIONS: dict[str, Category] = {
    "sleep": Category(
        "sleep",
        "Sleep",
        "Improve your rest and recovery.",
        (
            Question(
                "q1",
                "How consistent is your bedtime on weeknights?",
                (("a", "Within 30 minutes"), ("b", "Varies by about an hour"), ("c", "Varies by more than an hour")),
            ),
            Question(
                "q2",
                "What do you typically do in the 30 minutes before trying to sleep?",
                (
                    ("a", "Read a physical book or listen to calm audio"),
                    ("b", "Watch TV, a movie, or use my phone/tablet"),
                    ("c", "Work or do household chores"),
                ),
            ),
            Question(
                "q3",
                "How many hours of sleep do you average per night?",
                (("a", "More than 7.5 hours"), ("b", "Between 6 and 7.5 hours"), ("c", "Less than 6 hours")),
            ),
        ),
    ),
    "calories": Category(
        "calories",
        "Calorie Intake",
        "Align your energy with your goals.",
        (
            Question(
                "q1",
                'How often do you eat until you feel "stuffed" or uncomfortably full?',
                (("a", "Rarely or never"), ("b", "A few times a month"), ("c", "A few times per week or more")),
            ),
            Question(
                "q2",
                "How accurately do you think you know your daily calorie intake?",
                (
                    ("a", "I track it consistently"),
                    ("b", "I have a rough idea but don't track"),
                    ("c", "I have no idea"),
                ),
            ),
            Question(
                "q3",
                "When are you most likely to have unplanned meals or snacks?",
                (
                    ("a", "Almost never"),
                    ("b", "When I'm feeling stressed or bored"),
                    ("c", "In social settings with friends or family"),
                ),
            ),
        ),
    ),
    "protein": Category(
        "protein",
        "Protein Intake",
        "Support muscle and satiety.",
        (
            Question(
                "q1",
                "How many of your daily meals typically include a significant protein source "
                "(e.g., meat, fish, eggs, tofu)?",
                (("a", "At least 3 meals"), ("b", "2 meals"), ("c", "1 meal or less")),
            ),
            Question(
                "q2",
                "How would you describe the distribution of your protein intake?",
                (
                    ("a", "Spread fairly evenly throughout the day"),
                    ("b", "Heavily weighted towards one meal (usually dinner)"),
                    ("c", "It's completely random"),
                ),
            ),
        ),
    ),
    "training": Category(
        "training",
        "Adaptive Training",
        "Ensure your workouts are effective.",
        (
            Question(
                "q1",
                "How do you approach making your workouts more challenging over time (progressive overload)?",
                (
                    ("a", "I follow a structured program that tells me when to add weight/reps/etc."),
                    ("b", "I just go by how I feel on a given day."),
                    ("c", "I do the same workouts and rarely change the difficulty."),
                ),
            ),
            Question(
                "q2",
                "How often do you miss planned workouts in a typical month?",
                (("a", "0-1 times"), ("b", "2-4 times"), ("c", "5 or more times")),
            ),
        ),
    ),
    "lifestyle": Category(
        "lifestyle",
        "Lifestyle Guardrails",
        "Manage stress and distractions.",
        (
            Question(
                "q1",
                "How do you typically manage high-stress situations?",
                (
                    ("a", "With a proactive strategy like exercise, meditation, or talking to someone."),
                    ("b", "By distracting myself with entertainment (TV, social media, etc.)."),
                    ("c", "By using food or alcohol to unwind."),
                ),
            ),
            Question(
                "q2",
                "On an average day, how much non-work screen time do you have?",
                (("a", "Less than 2 hours"), ("b", "2-4 hours"), ("c", "More than 4 hours")),
            ),
        ),
    ),
}


def question_keys(category: str) -> tuple[str, ...]:
    if category not in QUESTIONS:
        return ()
    return tuple(question.key for question in QUESTIONS[category].questions)


def answers_complete(category: str, answers: Mapping[str, Optional[str]]) -> bool:
    keys = question_keys(category)
    return bool(keys) and all(answers.get(key) for key in keys)


def classify(category: str, answers: Mapping[str, Optional[str]]) -> str:
    for rule in RULES.get(category, ()):
        if rule.matches(answers):
            return rule.text
    return NO_HABIT_IDENTIFIED
