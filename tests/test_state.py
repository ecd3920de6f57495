import pytest

from score_annotator.parsers.state import ParserState, Section


def test_initial_state():
    state = ParserState()

    assert state.section is Section.OUTSIDE
    assert state.pip_indent is None
    assert state.active_channel == "conda-forge"
    assert not state.in_dependencies
    assert not state.in_pip_block


def test_pip_indent_requires_pip_block():
    with pytest.raises(ValueError):
        ParserState(section=Section.DEPENDENCIES, pip_indent=2)
    with pytest.raises(ValueError):
        ParserState(section=Section.PIP_BLOCK)


def test_pip_block_only_inside_dependencies():
    with pytest.raises(ValueError):
        ParserState().enter_pip_block(3)


def test_transitions_return_new_states():
    outside = ParserState()
    deps = outside.enter_dependencies()
    pip = deps.enter_pip_block(3)

    assert outside.section is Section.OUTSIDE
    assert deps.in_dependencies and not deps.in_pip_block
    assert pip.in_dependencies and pip.in_pip_block and pip.pip_indent == 3
    assert pip.leave_pip_block() == deps
    assert pip.leave_section() == outside


@pytest.mark.parametrize("channel", ["defaults", "nodefaults", "conda-forge", ""])
def test_passive_channels_do_not_change_default(channel):
    assert ParserState().with_channel(channel).active_channel == "conda-forge"


def test_first_custom_channel_sticks():
    state = ParserState().with_channel("bioconda").with_channel("pytorch")

    assert state.active_channel == "bioconda"
