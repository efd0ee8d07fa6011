import pytest

from snodelist.taskcount import (TaskCountDecoder, TaskCountError, decode,
                                 INVALID_INTEGER, INVALID_REPEAT,
                                 UNEXPECTED_CHARACTER)


def test_decode_run_length_entries():
    assert decode('4(x2),2,1(x3)') == [4, 4, 2, 1, 1, 1]


def test_decoder_exhausted_after_last_entry():
    decoder = TaskCountDecoder('4(x2),2,1(x3)')
    counts = [decoder.next_count() for _ in range(6)]
    assert counts == [4, 4, 2, 1, 1, 1]
    assert decoder.next_count() is None
    with pytest.raises(StopIteration):
        next(decoder)


@pytest.mark.parametrize('spec, expected', [
    ('', []),
    ('7', [7]),
    ('3,', [3]),
    ('0', [0]),
    ('12(x1)', [12]),
    ('36(x3),18', [36, 36, 36, 18]),
])
def test_decode_simple(spec, expected):
    assert decode(spec) == expected


@pytest.mark.parametrize('spec, kind, offset', [
    ('abc', INVALID_INTEGER, 0),
    ('4(y2)', INVALID_REPEAT, 2),
    ('4(x0)', INVALID_REPEAT, 3),
    ('4(x)', INVALID_REPEAT, 3),
    ('4(', INVALID_REPEAT, 2),
    ('4(x2', UNEXPECTED_CHARACTER, 4),
    ('4(x2]', UNEXPECTED_CHARACTER, 4),
    ('4(x2)5', UNEXPECTED_CHARACTER, 4),
    ('4a', UNEXPECTED_CHARACTER, 1),
    ('-1', INVALID_INTEGER, 0),
])
def test_decode_errors(spec, kind, offset):
    with pytest.raises(TaskCountError) as excinfo:
        decode(spec)
    assert excinfo.value.kind == kind
    assert excinfo.value.offset == offset
    assert excinfo.value.spec == spec


def test_error_message_locates_fault():
    with pytest.raises(TaskCountError) as excinfo:
        decode('2,1(y3)')
    assert str(excinfo.value) == 'invalid repeat specification at offset 4: 2,1(y3)'


def test_decoder_is_lazy():
    # counts before a bad entry are still produced
    decoder = TaskCountDecoder('2(x2),,3')
    assert next(decoder) == 2
    assert next(decoder) == 2
    with pytest.raises(TaskCountError) as excinfo:
        next(decoder)
    assert excinfo.value.kind == INVALID_INTEGER
    assert excinfo.value.offset == 6


def test_repeat_budget_not_reused():
    decoder = TaskCountDecoder('5(x2)')
    assert list(decoder) == [5, 5]
    assert decoder.next_count() is None
    assert decoder.next_count() is None


def test_error_messages_match_slurm_diagnostics():
    messages = {}
    for spec in ['4(y2)', '4(x0)', '4(x2)5', '4(x2]', 'n4']:
        with pytest.raises(TaskCountError) as excinfo:
            decode(spec)
        messages[spec] = str(excinfo.value)
    assert messages == {
        '4(y2)': 'invalid repeat specification at offset 2: 4(y2)',
        '4(x0)': 'invalid repeat count at offset 3: 4(x0)',
        '4(x2)5': 'unexpected character at offset 4: 4(x2)5',
        '4(x2]': 'unexpected character at offset 4: 4(x2]',
        'n4': 'invalid integer value at offset 0: n4',
    }
