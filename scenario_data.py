# scenario_data.py
# Authored practice scenarios keyed by category, then difficulty.
# Each option lists its ARC deltas; options whose deltas total zero or less
# are non-optimal and must name a better alternative.

from typing import Any, Dict, List, Optional


def _option(
    *,
    identifier: str,
    text: str,
    arc: Dict[str, int],
    explanation: str,
    learning_points: List[str],
    alternative: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "id": identifier,
        "text": text,
        "arc": arc,
        "explanation": explanation,
        "learning_points": learning_points,
        "alternative": alternative,
    }


def _scenario(
    *,
    identifier: str,
    title: str,
    context: str,
    options: List[Dict[str, Any]],
    learning_objective: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> Dict[str, Any]:
    return {
        "id": identifier,
        "title": title,
        "context": context,
        "options": options,
        "learning_objective": learning_objective,
        "tags": tags or [],
    }


SCENARIO_LIBRARY: Dict[str, Dict[str, List[Dict[str, Any]]]] = {
    "workplace": {
        "beginner": [
            _scenario(
                identifier="workplace-morning-greeting",
                title="Daily Challenge",
                context="You arrive at the office. Colleagues are chatting by the kitchen before stand-up.",
                learning_objective="Open the day with a small, genuine connection.",
                tags=["greeting", "team"],
                options=[
                    _option(
                        identifier="ignore-everyone",
                        text="Put your headphones on and work silently.",
                        arc={"appreciation": -2, "reality": -1, "communication": -2},
                        explanation="Shutting people out signals disinterest and lowers the shared mood.",
                        learning_points=["Small greetings keep communication lines open."],
                        alternative="Greet your colleagues before settling in.",
                    ),
                    _option(
                        identifier="greet-with-smile",
                        text="Greet your colleagues with a smile and ask about their weekend.",
                        arc={"appreciation": 1, "reality": 1, "communication": 1},
                        explanation="A warm greeting shows regard and invites a two-way exchange.",
                        learning_points=[
                            "Appreciation is often expressed through simple attention.",
                            "Asking a question turns a greeting into communication.",
                        ],
                    ),
                    _option(
                        identifier="vent-about-work",
                        text="Complain about the workload before anyone else speaks.",
                        arc={"appreciation": -1, "reality": 1, "communication": -1},
                        explanation="Venting may be honest, but it pulls the group's tone down first thing.",
                        learning_points=["Share concerns at a time and place suited to solving them."],
                        alternative="Raise the workload concern during stand-up with a proposal.",
                    ),
                ],
            ),
        ],
        "intermediate": [
            _scenario(
                identifier="workplace-missed-deadline",
                title="The Missed Deadline",
                context="A teammate missed a deadline that blocks your work, and the manager asks what happened.",
                learning_objective="Stay factual without blaming.",
                tags=["conflict", "accountability"],
                options=[
                    _option(
                        identifier="blame-teammate",
                        text="Tell the manager it is entirely your teammate's fault.",
                        arc={"appreciation": -3, "reality": 0, "communication": -1},
                        explanation="Blame damages trust even when the facts are on your side.",
                        learning_points=["Describe impact, not character."],
                        alternative="Explain the dependency and suggest how to unblock it together.",
                    ),
                    _option(
                        identifier="state-facts-and-plan",
                        text="Describe the dependency, the impact, and a plan to recover.",
                        arc={"appreciation": 1, "reality": 2, "communication": 2},
                        explanation="Facts plus a path forward build shared reality and keep the team intact.",
                        learning_points=[
                            "Shared understanding of facts is the Reality corner of ARC.",
                            "Proposals move conversations from blame to action.",
                        ],
                    ),
                    _option(
                        identifier="cover-silently",
                        text="Say everything is fine and quietly work late to cover it.",
                        arc={"appreciation": 1, "reality": -2, "communication": -1},
                        explanation="Hiding the problem protects the moment but erodes honest communication.",
                        learning_points=["Unspoken problems tend to return larger."],
                        alternative="Acknowledge the delay openly and agree on a recovery plan.",
                    ),
                ],
            ),
        ],
        "advanced": [
            _scenario(
                identifier="workplace-public-criticism",
                title="Criticism in the Meeting",
                context="During a meeting, a senior colleague sharply criticises your proposal in front of everyone.",
                learning_objective="Regulate the first reaction and keep the exchange productive.",
                tags=["criticism", "self-regulation"],
                options=[
                    _option(
                        identifier="snap-back",
                        text="Point out the flaws in their last project.",
                        arc={"appreciation": -3, "reality": -1, "communication": -2},
                        explanation="Retaliation escalates the conflict and hides the useful part of the feedback.",
                        learning_points=["Pause before responding to a public challenge."],
                        alternative="Thank them for the input and ask which part concerns them most.",
                    ),
                    _option(
                        identifier="ask-clarifying-question",
                        text="Ask which part of the proposal concerns them most.",
                        arc={"appreciation": 2, "reality": 2, "communication": 3},
                        explanation="Curiosity defuses tension and surfaces the real objection.",
                        learning_points=[
                            "Questions keep communication flowing under pressure.",
                            "Acknowledging a concern is not the same as agreeing with it.",
                        ],
                    ),
                    _option(
                        identifier="go-quiet",
                        text="Say nothing for the rest of the meeting.",
                        arc={"appreciation": 0, "reality": -1, "communication": -2},
                        explanation="Withdrawing leaves the criticism unanswered and the proposal undefended.",
                        learning_points=["Silence is also a message."],
                        alternative="Offer to follow up one-on-one after the meeting.",
                    ),
                ],
            ),
        ],
    },
    "family": {
        "beginner": [
            _scenario(
                identifier="family-dinner-phones",
                title="Phones at Dinner",
                context="Everyone at the family dinner table is scrolling on their phones.",
                learning_objective="Invite connection without lecturing.",
                tags=["family", "attention"],
                options=[
                    _option(
                        identifier="lecture-about-phones",
                        text="Give a speech about how nobody talks anymore.",
                        arc={"appreciation": -1, "reality": 0, "communication": -1},
                        explanation="Lecturing puts people on the defensive.",
                        learning_points=["Model the behaviour you want to see."],
                        alternative="Put your own phone away and share something from your day.",
                    ),
                    _option(
                        identifier="share-a-story",
                        text="Put your phone away and share a funny moment from your day.",
                        arc={"appreciation": 1, "reality": 1, "communication": 2},
                        explanation="An inviting story gives others a reason to look up and join in.",
                        learning_points=["Communication often starts with a small offer."],
                    ),
                ],
            ),
        ],
        "intermediate": [
            _scenario(
                identifier="family-sibling-borrowed-car",
                title="The Borrowed Car",
                context="Your sibling returned your car with an empty tank and a new scratch.",
                learning_objective="Address the problem while protecting the relationship.",
                tags=["family", "boundaries"],
                options=[
                    _option(
                        identifier="yell-at-sibling",
                        text="Call them and shout about how careless they are.",
                        arc={"appreciation": -2, "reality": 0, "communication": -2},
                        explanation="Anger makes the listener defend themselves rather than fix things.",
                        learning_points=["Describe what happened and what you need."],
                        alternative="Tell them calmly what you noticed and ask how they want to make it right.",
                    ),
                    _option(
                        identifier="calm-request",
                        text="Tell them calmly what you noticed and ask how they'll make it right.",
                        arc={"appreciation": 1, "reality": 2, "communication": 1},
                        explanation="A calm, specific request keeps both the facts and the relationship intact.",
                        learning_points=[
                            "Specific requests are easier to act on than complaints.",
                            "Calm tone invites responsibility.",
                        ],
                    ),
                ],
            ),
        ],
    },
    "friends": {
        "beginner": [
            _scenario(
                identifier="friends-weekend-plans",
                title="Weekend Plans",
                context="Friends ask whether you'll join them for a hike this weekend.",
                learning_objective="Respond honestly and keep the door open.",
                tags=["friends", "invitations"],
                options=[
                    _option(
                        identifier="make-excuses",
                        text="Make up an excuse to stay home.",
                        arc={"appreciation": -1, "reality": -1, "communication": 0},
                        explanation="Invented excuses create distance and are hard to keep straight.",
                        learning_points=["Honest declines preserve trust."],
                        alternative="Say you need a quiet weekend and suggest another time.",
                    ),
                    _option(
                        identifier="join-enthusiastically",
                        text="Say yes and offer to bring snacks.",
                        arc={"appreciation": 2, "reality": 1, "communication": 2},
                        explanation="Enthusiasm and a small contribution raise everyone's tone.",
                        learning_points=["Showing up, with something to offer, signals appreciation."],
                    ),
                    _option(
                        identifier="suggest-alternative",
                        text="Suggest a picnic instead since your knee is sore.",
                        arc={"appreciation": 1, "reality": 1, "communication": 0},
                        explanation="Offering an alternative keeps you involved while being honest about limits.",
                        learning_points=["Alternatives show you value the invitation."],
                    ),
                ],
            ),
        ],
        "advanced": [
            _scenario(
                identifier="friends-forgotten-birthday",
                title="The Forgotten Birthday",
                context="A close friend seems distant; you realise you forgot their birthday last week.",
                learning_objective="Repair a rupture with a sincere apology.",
                tags=["friends", "repair"],
                options=[
                    _option(
                        identifier="pretend-nothing-happened",
                        text="Act normal and hope they forget about it.",
                        arc={"appreciation": -2, "reality": -2, "communication": -1},
                        explanation="Avoiding the topic confirms their sense of being overlooked.",
                        learning_points=["Ruptures heal faster when named."],
                        alternative="Apologise directly and plan a belated celebration together.",
                    ),
                    _option(
                        identifier="sincere-apology",
                        text="Apologise directly and plan a belated celebration together.",
                        arc={"appreciation": 3, "reality": 2, "communication": 2},
                        explanation="Owning the mistake restores appreciation and honest communication.",
                        learning_points=[
                            "A good apology names the impact without excuses.",
                            "Follow-through turns an apology into repair.",
                        ],
                    ),
                ],
            ),
        ],
    },
    "general": {
        "beginner": [
            _scenario(
                identifier="general-coffee-order",
                title="Wrong Coffee Order",
                context="The barista hands you the wrong drink during the morning rush.",
                learning_objective="Stay courteous under minor frustration.",
                tags=["strangers", "patience"],
                options=[
                    _option(
                        identifier="sigh-loudly",
                        text="Sigh loudly and tell them to pay attention.",
                        arc={"appreciation": -2, "reality": 0, "communication": -1},
                        explanation="Irritation spreads quickly in a busy queue.",
                        learning_points=["Minor mistakes deserve minor reactions."],
                        alternative="Politely mention the mix-up and thank them for fixing it.",
                    ),
                    _option(
                        identifier="polite-correction",
                        text="Politely mention the mix-up and thank them for fixing it.",
                        arc={"appreciation": 2, "reality": 1, "communication": 1},
                        explanation="Courtesy keeps the exchange light and gets you the right drink.",
                        learning_points=["Gratitude lowers the temperature of small conflicts."],
                    ),
                ],
            ),
        ],
    },
}
