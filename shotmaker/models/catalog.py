"""Static catalogs: actor pool, scene pool, genres and starter ideas."""

import random
from typing import Optional, Sequence

from shotmaker.models.schemas import Actor, SetScene

GENRES = ["Sci-Fi", "Mystery", "Modern"]

INSPIRATIONS = [
    "A cyberpunk tea ceremony in a zero-gravity ramen bar, with a collapsing holographic dragon in the background.",
    "A Victorian detective investigates a murder whose only witness is a time-travelling smart toaster.",
    "A post-apocalyptic ballet performed by rusted industrial robots in an underwater opera house.",
    "Ancient Egyptian gods gamble everything in a neon-lit space Las Vegas.",
    "A hacker who steals human dreams and sells them as NFTs on the dark web.",
    "A high-speed skateboard race on the rings of Saturn, dodging a sentient meteor shower.",
    "The last human couple, in a post-apocalyptic botanical garden, tries to teach a gardening robot what love is.",
]

ACTORS_POOL = [
    Actor(
        id="1",
        name="Kaelen",
        description="Cold, deep and brooding; a natural sci-fi lead",
        avatar_url="https://picsum.photos/seed/actor1/400/600",
        age="28",
        gender="Male",
        voice="Deep and resonant",
        tone="Steady",
    ),
    Actor(
        id="2",
        name="Aria",
        description="Lively, curious and emotionally expressive",
        avatar_url="https://picsum.photos/seed/actor2/400/600",
        age="22",
        gender="Female",
        voice="Clear and sweet",
        tone="Playful",
    ),
    Actor(
        id="3",
        name="Marcus",
        description="Weighty and composed; suits villains or leaders",
        avatar_url="https://picsum.photos/seed/actor3/400/600",
        age="45",
        gender="Male",
        voice="Commanding baritone",
        tone="Restrained",
    ),
    Actor(
        id="4",
        name="Elena",
        description="Decisive and intimidating; suits a formidable heroine",
        avatar_url="https://picsum.photos/seed/actor4/400/600",
        age="35",
        gender="Female",
        voice="Calm and crisp",
        tone="Sharp",
    ),
]

SCENES = [
    SetScene(
        id="abandoned-lab",
        name="Abandoned Lab",
        description="Unity Built-in - cyber industrial",
        image_url="https://picsum.photos/seed/scene1/800/450",
    ),
    SetScene(
        id="lunar-base",
        name="Lunar Base",
        description="Unity realistic - seamless ring habitat",
        image_url="https://picsum.photos/seed/scene2/800/450",
    ),
    SetScene(
        id="neon-district",
        name="Neon District",
        description="Unity real-time ray tracing - high tension",
        image_url="https://picsum.photos/seed/scene3/800/450",
    ),
]


def random_inspiration(rng: Optional[random.Random] = None) -> str:
    """Pick a starter idea for a fresh project."""
    return (rng or random).choice(INSPIRATIONS)


def get_actor(actor_id: str, actors: Optional[Sequence[Actor]] = None) -> Optional[Actor]:
    """Find an actor by id in `actors` (the full pool by default)."""
    for actor in ACTORS_POOL if actors is None else actors:
        if actor.id == actor_id:
            return actor
    return None


def get_scene(scene_id: str, scenes: Optional[Sequence[SetScene]] = None) -> Optional[SetScene]:
    for scene in SCENES if scenes is None else scenes:
        if scene.id == scene_id:
            return scene
    return None
