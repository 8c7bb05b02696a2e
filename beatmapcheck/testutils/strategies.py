"""
Hypothesis strategies to generate difficulty contents that are valid for a
song of a given length
"""

from dataclasses import fields
from typing import Any, List, Tuple

import hypothesis.strategies as st

from beatmapcheck.difficulty.v2 import schema as v2
from beatmapcheck.difficulty.v3 import schema as v3

positions = st.integers(min_value=0, max_value=3)
layers = st.integers(min_value=0, max_value=2)
colors = st.sampled_from([0, 1])
small_ints = st.integers(min_value=0, max_value=10)
small_floats = st.floats(min_value=0, max_value=10)


def beats(max_beat: float) -> st.SearchStrategy[float]:
    return st.floats(min_value=0, max_value=max_beat)


@st.composite
def v2_note(draw: st.DrawFn, max_beat: float = 360) -> v2.Note:
    return v2.Note(
        time=draw(beats(max_beat)),
        line_index=draw(positions),
        line_layer=draw(layers),
        type=draw(st.sampled_from([0, 1, 3])),
        cut_direction=draw(
            st.one_of(
                st.integers(min_value=0, max_value=8),
                st.integers(min_value=1000, max_value=1360),
            )
        ),
    )


@st.composite
def v2_obstacle(draw: st.DrawFn, max_beat: float = 360) -> v2.Obstacle:
    return v2.Obstacle(
        time=draw(beats(max_beat)),
        line_index=draw(positions),
        type=draw(st.sampled_from([0, 1])),
        duration=draw(small_floats),
        width=draw(st.integers(min_value=1, max_value=4)),
    )


@st.composite
def v2_event(draw: st.DrawFn, max_beat: float = 360) -> v2.Event:
    return v2.Event(
        time=draw(beats(max_beat)),
        type=draw(small_ints),
        value=draw(small_ints),
    )


@st.composite
def v2_difficulty(draw: st.DrawFn, max_beat: float = 360) -> v2.Difficulty:
    return v2.Difficulty(
        version="2.2.0",
        notes=draw(st.lists(v2_note(max_beat), max_size=10)),
        obstacles=draw(st.lists(v2_obstacle(max_beat), max_size=5)),
        events=draw(st.lists(v2_event(max_beat), max_size=5)),
    )


@st.composite
def v3_color_note(draw: st.DrawFn, max_beat: float = 360) -> v3.ColorNote:
    return v3.ColorNote(
        beat=draw(beats(max_beat)),
        x=draw(positions),
        y=draw(layers),
        color=draw(colors),
        direction=draw(st.integers(min_value=0, max_value=8)),
        angle=draw(st.integers(min_value=-45, max_value=45)),
    )


@st.composite
def v3_bomb(draw: st.DrawFn, max_beat: float = 360) -> v3.BombNote:
    return v3.BombNote(beat=draw(beats(max_beat)), x=draw(positions), y=draw(layers))


@st.composite
def v3_obstacle(draw: st.DrawFn, max_beat: float = 360) -> v3.Obstacle:
    return v3.Obstacle(
        beat=draw(beats(max_beat)),
        x=draw(positions),
        y=draw(layers),
        duration=draw(small_floats),
        width=draw(st.integers(min_value=1, max_value=4)),
        height=draw(st.integers(min_value=1, max_value=5)),
    )


@st.composite
def v3_slider(draw: st.DrawFn, max_beat: float = 360) -> v3.Slider:
    return v3.Slider(
        beat=draw(beats(max_beat)),
        color=draw(colors),
        x=draw(positions),
        y=draw(layers),
        direction=draw(st.integers(min_value=0, max_value=8)),
        head_control_point_length_multiplier=draw(small_floats),
        tail_beat=draw(beats(max_beat)),
        tail_x=draw(positions),
        tail_y=draw(layers),
        tail_cut_direction=draw(st.integers(min_value=0, max_value=8)),
        tail_control_point_length_multiplier=draw(small_floats),
        slider_mid_anchor_mode=draw(st.sampled_from([0, 1, 2])),
    )


@st.composite
def v3_burst_slider(draw: st.DrawFn, max_beat: float = 360) -> v3.BurstSlider:
    return v3.BurstSlider(
        beat=draw(beats(max_beat)),
        color=draw(colors),
        x=draw(positions),
        y=draw(layers),
        direction=draw(st.integers(min_value=0, max_value=8)),
        tail_beat=draw(beats(max_beat)),
        tail_x=draw(positions),
        tail_y=draw(layers),
        slice_count=draw(st.integers(min_value=1, max_value=32)),
        squish_amount=draw(small_floats),
    )


@st.composite
def v3_basic_event(draw: st.DrawFn, max_beat: float = 360) -> v3.BasicEvent:
    return v3.BasicEvent(
        beat=draw(beats(max_beat)),
        event_type=draw(small_ints),
        value=draw(small_ints),
        float_value=draw(st.floats(min_value=0, max_value=1)),
    )


@st.composite
def v3_difficulty(draw: st.DrawFn, max_beat: float = 360) -> v3.Difficulty:
    return v3.Difficulty(
        version="3.2.0",
        bpm_events=[v3.BPMEvent(beat=0, bpm=120)],
        rotation_events=draw(
            st.lists(
                st.builds(
                    v3.RotationEvent,
                    beat=beats(max_beat),
                    execution_time=st.sampled_from([0, 1]),
                    rotation=st.floats(min_value=-60, max_value=60),
                ),
                max_size=3,
            )
        ),
        color_notes=draw(st.lists(v3_color_note(max_beat), max_size=10)),
        bomb_notes=draw(st.lists(v3_bomb(max_beat), max_size=5)),
        obstacles=draw(st.lists(v3_obstacle(max_beat), max_size=5)),
        sliders=draw(st.lists(v3_slider(max_beat), max_size=3)),
        burst_sliders=draw(st.lists(v3_burst_slider(max_beat), max_size=3)),
        basic_events=draw(st.lists(v3_basic_event(max_beat), max_size=5)),
    )


def collections_of(body: Any) -> List[Tuple[str, List[Any]]]:
    """(attribute name, items) of every non empty element collection"""
    return [
        (f.name, getattr(body, f.name))
        for f in fields(body)
        if isinstance(getattr(body, f.name), list) and getattr(body, f.name)
    ]


@st.composite
def element_field(draw: st.DrawFn, body: Any) -> Tuple[str, int, str]:
    """Picks (collection attribute, index, field attribute) inside a body that
    has at least one element"""
    collection, items = draw(st.sampled_from(collections_of(body)))
    index = draw(st.integers(min_value=0, max_value=len(items) - 1))
    field_name = draw(st.sampled_from([f.name for f in fields(items[index])]))
    return collection, index, field_name
