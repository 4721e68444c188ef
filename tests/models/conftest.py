import pytest
from image_to_chords.models import NormalizedBox, PixelRect, ChordPosition


@pytest.fixture
def valid_box():
    return NormalizedBox(x=0.1, y=0.2, w=0.3, h=0.4)


@pytest.fixture
def valid_chord_position():
    return ChordPosition(
        chord="Am7", bounds=PixelRect(x=10.0, y=20.0, w=30.0, h=15.0), font_size=12.0
    )
