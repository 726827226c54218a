"""The shipped program: per-phase step lists concatenated in fixed order.

Ids 68 and 90 are intentionally unused. Where-are-you-now owns 62..65;
the getting-ready and measurable-goal exercises that once also claimed
62 and 63 are mounted there instead of being listed twice.
"""
from functools import lru_cache
from typing import Optional

from pathway.config import settings
from pathway.program import form_registry as forms
from pathway.program.catalog import Catalog, StepDescriptor
from pathway.program.focus import FocusContent
from pathway.program.forms import FormContent, FormSpec


def _step(
    step_id: int,
    title: str,
    description: str,
    form: Optional[FormSpec] = None,
    next_step_id: Optional[int] = None,
    **options,
) -> StepDescriptor:
    if form is not None and next_step_id is None:
        next_step_id = form.next_step_number
    return StepDescriptor(
        id=step_id,
        title=title,
        description=description,
        content=FormContent(form or forms.reflection_form(step_id)),
        next_step_id=next_step_id,
        **options,
    )


STARTING_POINT_STEPS = [
    _step(1, "Ambivalence", "Understanding mixed feelings about change"),
    StepDescriptor(
        id=2,
        title="Focus Habits",
        description="Select your key transformation habits",
        content=FocusContent(),
    ),
    _step(3, "Internal Obstacles", "Identify your internal barriers"),
    _step(4, "Attitude Check", "Assess your attitude towards your goal"),
    _step(5, "Behaviors", "Identify behaviors that may hold you back"),
    _step(6, "Knowledge Gaps", "Identify areas of uncertainty"),
    _step(7, "Social Network", "Evaluate your support system"),
    _step(8, "Cultural Obstacles", "Identify cultural barriers to change"),
    _step(9, "Environmental Stressors", "Identify environmental barriers"),
    _step(10, "Identifying Ambivalence", "Explore your mixed feelings about change"),
    _step(11, "Addressing Ambivalence", "Develop strategies for managing emotions"),
    _step(12, "External Obstacles", "Identify and solve external barriers to your goal"),
    _step(13, "Thinking Assertively", "Develop assertiveness skills"),
    _step(14, "Exploring Values", "Identify and prioritize your core values"),
    _step(15, "Clarifying Values", "Define and align your core values", forms.CLARIFYING_VALUES),
    _step(16, "Exceptions to the Rule", "Document your success in overcoming obstacles"),
    _step(17, "Past Success", "Reflect on past achievements to build confidence"),
]

EXPLORING_STEPS = [
    _step(18, "Exploring Change", "Understanding the elements of motivation"),
    _step(19, "How Important Is It?", "Understanding the importance of change"),
    _step(20, "What Would Change Look Like?", "Visualizing your fitness transformation"),
    _step(21, "Understanding Values", "Explore and understand your core values"),
    _step(22, "Defining Importance", "Understanding the significance of your goals"),
    _step(23, "Importance Scale", "Rate the importance of your fitness goal"),
    _step(24, "Giving Your Goal a Score", "Rate the importance of your fitness goal"),
    _step(25, "Taking Another Step Toward Change", "Consider what it would take to increase your score"),
    _step(26, "Assessing the Importance of My Steps Forward", "Rate and choose your next steps forward"),
]

CONFIDENCE_STEPS = [
    _step(27, "Setting Your Ceiling and Floor", "Define best and worst possible outcomes"),
    _step(28, "Defining Confidence", "Explore what confidence means to you"),
    _step(29, "Creating a Confidence Scale", "Define your confidence scale"),
    _step(30, "Giving Yourself a Score", "Rate your current confidence level"),
    _step(31, "Taking Another Step Toward Change", "Consider what it would take to increase your score"),
    _step(32, "Assessing Your Confidence in Your Steps Forward", "Rate your confidence in each step forward"),
    _step(33, "Importance x Confidence", "Identify which quadrant you belong in"),
    _step(34, "Building Confidence: Confidence Talk", "Create positive self-talk to build confidence"),
]

STRENGTH_STEPS = [
    _step(35, "Past Successes", "Reflect on small changes you've made"),
    _step(36, "Finding Hope", "Explore what gives you hope for change"),
    _step(37, "Finding Inspiration", "Finding sources of inspiration", forms.FINDING_INSPIRATION),
    _step(38, "Revisit Values", "Reassess your prioritized values"),
    _step(39, "Values Conflict", "Explore values prioritization conflicts", forms.VALUES_CONFLICT),
    _step(40, "You Have What It Takes", "Identify your personal strengths"),
    _step(41, "They See Your Strengths", "Collect feedback on your strengths from others"),
    _step(42, "Build on Your Strengths", "Apply your strengths to achieve your goals", forms.BUILD_ON_STRENGTHS),
]

STRESS_STEPS = [
    _step(43, "Managing Stress", "Learn about stress management techniques"),
    _step(44, "Identifying Your Type of Stress", "Understand different types of stress in your life"),
    _step(45, "How Stressed Am I?", "Rate the intensity of your stressors"),
    _step(46, "Coping Mechanisms", "Develop strategies to cope with stress"),
    _step(47, "Mindfulness", "Practice mindfulness meditation techniques"),
    _step(48, "Growth Mindset", "Develop a mindset that embraces learning and growth"),
    _step(49, "Affirmations", "Create positive self-affirmations"),
]

RESOURCE_STEPS = [
    _step(
        50,
        "Financial and Economic Resources",
        "Identify financial resources that support your fitness goals",
        forms.FINANCIAL_RESOURCES,
    ),
    _step(51, "Social Support and Social Competence", "Identify your social support system and competence"),
    _step(52, "Family Strengths", "Leverage your family strengths for motivation", forms.FAMILY_STRENGTHS),
    _step(53, "Time Management and Personal Structure", "Learn to manage your time effectively for fitness goals"),
    _step(54, "Social and Cultural Resources", "Leverage your cultural background for motivation"),
    _step(
        55,
        "Environmental or Situational Supports and Resources",
        "Identify resources in your environment that support your fitness goals",
    ),
    _step(56, "Resource Development", "Develop and enhance your resources for achieving fitness goals"),
]

ENVISIONING_STEPS = [
    _step(57, "Envisioning Change", "Create a clear vision of your successful change"),
    _step(58, "Realistic Change", "Set a realistic goal based on your strengths and resources"),
    _step(59, "Feelings Around Partial Change", "Acknowledge and celebrate your progress towards your goals"),
    _step(60, "Priorities", "Organize your tasks by importance and urgency"),
    _step(61, "Think About the Big Picture", "Connect your changes to larger goals", forms.BIG_PICTURE_WHY),
]

WHERE_ARE_YOU_NOW_STEPS = [
    _step(62, "Where Are You Now?", "Assess your current progress and motivation level"),
    _step(63, "Getting Ready for Change", "Prepare yourself mentally for making changes", forms.GETTING_READY),
    _step(64, "Making Your Goal Measurable", "Define your goal in specific, measurable terms"),
    _step(65, "Identifying the Steps to Reach Your Goal", "Brainstorm actions to achieve your goal", next_step_id=66),
    _step(66, "Developing Objectives for Your Goal", "Create SMART objectives for your goal"),
]

REWARDS_STEPS = [
    _step(
        67,
        "Rewards Create an Incentive to Change",
        "Plan meaningful rewards for achieving your goals",
        next_step_id=69,
    ),
    _step(
        69,
        "Rewards from People Who Matter",
        "Identify rewards involving praise from important people",
        next_step_id=70,
    ),
    _step(70, "Rewards: Events and Activities", "Plan activity-based rewards for achieving goals"),
    _step(71, "Narrowing Down the Rewards", "Select your top five most meaningful rewards", next_step_id=72),
    _step(72, "Get Organized", "Create a system to organize your action plan"),
    _step(73, "Seek Positive Information Daily", "Find sources that reinforce your commitment to fitness"),
    _step(74, "Think About the Big Picture and Your Big Why", "Revisit your ultimate goal and motivations"),
    _step(75, "Control", "Focus on what you can control and let go of what you can't", forms.CONTROL),
    _step(76, "Small Steps", "Break down large goals into achievable small steps", forms.SMALL_STEPS),
    _step(77, "Be Consistent", "Create a schedule for consistently working on your goals"),
    _step(78, "Support System Roles", "Define how people in your support system can help you"),
    _step(79, "Social System Boundaries", "Set boundaries with people who may not support your goals"),
    _step(80, "Finding Community", "Connect with groups that can support your fitness journey"),
    _step(81, "Visualize Results", "Imagine your progress at different time milestones", forms.VISUALIZE_RESULTS),
    _step(82, "Helpful Ideas", "Rank the most helpful techniques you've learned"),
    _step(83, "Self-Observation", "Journal your daily observations about behavior patterns"),
    _step(84, "Obstacles to Opportunities", "Transform potential barriers into chances for growth"),
]

STAYING_ON_TRACK_STEPS = [
    _step(85, "Monitoring Your Progress", "Rate how each area of your plan is going", forms.MONITORING_PROGRESS),
    _step(86, "Dealing with Setbacks: Stress Check", "Notice how stress is affecting your progress"),
    _step(87, "Dealing with Setbacks: Self-Care", "Plan ways to take care of yourself after a slip"),
    _step(88, "Dealing with Setbacks: Recommit", "Choose coping skills and recommit to your plan", forms.SETBACKS_RECOMMIT),
    _step(89, "Change Your Plan", "Adjust your change plan based on what you've learned", forms.CHANGE_PLAN),
    _step(91, "A Final Word", "Your journey begins now", forms.FINAL_WORD),
]

PHASE_STEP_LISTS = [
    STARTING_POINT_STEPS,
    EXPLORING_STEPS,
    CONFIDENCE_STEPS,
    STRENGTH_STEPS,
    STRESS_STEPS,
    RESOURCE_STEPS,
    ENVISIONING_STEPS,
    WHERE_ARE_YOU_NOW_STEPS,
    REWARDS_STEPS,
    STAYING_ON_TRACK_STEPS,
]


def build_steps() -> list[StepDescriptor]:
    return [step for step_list in PHASE_STEP_LISTS for step in step_list]


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    return Catalog(build_steps(), strict=settings.STRICT_CATALOG)
