import pytest

from mrq_codec import MarqueeDocument


@pytest.fixture
def tempest() -> MarqueeDocument:
    return MarqueeDocument(
        title="Tempest 2000",
        developer="Llamasoft",
        publisher="Atari Corporation",
        year="1994",
    )
