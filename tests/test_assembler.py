import pytest

from hackasm import assembler
from hackasm.assembler import Status, assemble, assemble_file, check_writable, output_name

ADD = ['@2\n', 'D=A\n', '@3\n', 'D=D+A\n', '@0\n', 'M=D\n']

ADD_HACK = [
    '0000000000000010',
    '1110110000010000',
    '0000000000000011',
    '1110000010010000',
    '0000000000000000',
    '1110001100001000',
]

MULT = '''\
// Multiplies R0 and R1 and stores the result in R2.
@R2\r
M=0\r
@i\r
M=0\r
(LOOP)\r
@i\r
D=M\r
@R1\r
D=D-M\r
@END\r
D;JGE\r
@R0\r
D=M\r
@R2\r
M=D+M\r
@i\r
M=M+1\r
@LOOP\r
0;JMP\r
(END)\r
@END\r
0;JMP\r
'''


def test_add():
    result = assemble(ADD)
    assert result.ok
    assert result.words == ADD_HACK


def test_line_endings_do_not_matter():
    crlf = [l.replace('\n', '\r\n') for l in ADD]
    assert assemble(crlf).words == ADD_HACK


def test_comments_and_blanks_produce_nothing():
    result = assemble(['// comment\n', '\n', '@2\n', '\r\n', '// more\n', 'D=A\n'])
    assert result.words == ADD_HACK[:2]
    assert [r.status for r in result.results] == [
        Status.SKIPPED, Status.SKIPPED, Status.ENCODED, Status.SKIPPED, Status.SKIPPED, Status.ENCODED]


def test_label_addresses():
    result = assemble(MULT.splitlines(keepends=True))
    assert result.ok
    assert result.symbols['LOOP'] == 4
    assert result.symbols['END'] == 18
    assert result.symbols['i'] == 16
    assert result.symbols.labels == ['LOOP', 'END']
    assert result.symbols.variables == ['i']
    assert result.program_length == 20
    assert result.words[16] == '0000000000000100'       # @LOOP
    assert result.words[18] == '0000000000010010'       # @END


def test_label_after_comments_and_blanks():
    src = ['// x\n', '\n', '@1\n', '@2\n', '\n', '@3\n', '(LOOP)\n', '// y\n', 'D=A\n', '@LOOP\n']
    result = assemble(src)
    assert result.symbols['LOOP'] == 3
    assert result.words[-1] == '0000000000000011'


def test_forward_label_reference():
    result = assemble(['@END\n', '0;JMP\n', '(END)\n', '@END\n', '0;JMP\n'])
    assert result.words[0] == result.words[2] == '0000000000000010'


def test_variables_in_order_of_first_use():
    result = assemble(['@i\n', 'M=1\n', '@sum\n', 'M=0\n', '@i\n', 'D=M\n'])
    assert result.words[0] == '0000000000010000'
    assert result.words[2] == '0000000000010001'
    assert result.words[4] == '0000000000010000'
    assert result.ram_used == 18


def test_repeatable():
    src = MULT.splitlines(keepends=True)
    assert assemble(src).words == assemble(src).words


def test_bad_line_is_reported_and_skipped():
    result = assemble(['@2\n', 'D=D+2\n', 'D=A\n'])
    assert not result.ok
    assert result.words == ADD_HACK[:2]
    [e] = result.errors
    assert e.number == 2
    assert e.status == Status.REJECTED
    assert 'Unknown alu operation' in e.message
    assert e.word is None


def test_huge_literal_is_rejected_and_assembly_carries_on():
    result = assemble(['@' + '9' * 5000 + '\n', 'D=A\n'])
    assert [r.status for r in result.results] == [Status.REJECTED, Status.ENCODED]
    assert 'out of 0..32767 range' in result.errors[0].message
    assert result.words == ['1110110000010000']


def test_program_length_counts_rejected_lines():
    result = assemble(['@1\n', 'D=Q\n', '(NEXT)\n', '@NEXT\n'])
    assert result.program_length == 3
    assert result.symbols['NEXT'] == 2
    assert len(result.words) == 2


def test_out_of_range_literal():
    result = assemble(['@32768\n', '@32767\n'])
    assert [e.number for e in result.errors] == [1]
    assert result.words == ['0111111111111111']


def test_duplicate_label():
    result = assemble(['(LOOP)\n', '@1\n', '(LOOP)\n', '@LOOP\n'])
    [e] = result.errors
    assert e.number == 3
    assert 'previously defined' in e.message
    assert result.symbols['LOOP'] == 0
    assert result.words == ['0000000000000001', '0000000000000000']


def test_malformed_label():
    result = assemble(['(LOOP\n', '@1\n'])
    [e] = result.errors
    assert e.number == 1
    assert 'does not end' in e.message


def test_raw_lines_keep_whitespace():
    result = assemble(['D=M-D   // n-i\n', 'D;JEQ // loop back\n'])
    [e] = result.errors
    assert e.number == 1
    assert result.words == ['1110001100000010']


def test_lenient():
    src = ['  @2   // two\n', '  D = A\n', '    \n', ' (X) \n', '  @X\n']
    result = assemble(src, lenient=True)
    assert result.ok
    assert result.words == ADD_HACK[:2] + ['0000000000000010']


def test_output_name():
    assert output_name('prog/Add.asm') == 'prog/Add.hack'


def test_assemble_file(tmp_path):
    asm = tmp_path / 'Add.asm'
    asm.write_text(''.join(ADD))
    result = assemble_file(str(asm))
    assert result.ok
    assert (tmp_path / 'Add.hack').read_text() == ''.join(w + '\n' for w in ADD_HACK)


def test_assemble_file_strict(tmp_path):
    asm = tmp_path / 'Bad.asm'
    asm.write_text('@2\nD=Q\n')
    result = assemble_file(str(asm), strict=True)
    assert not result.ok
    assert not (tmp_path / 'Bad.hack').exists()


def test_unwritable_output_stops_before_assembly(tmp_path, monkeypatch):
    asm = tmp_path / 'Add.asm'
    asm.write_text(''.join(ADD))

    def never(*args, **kwargs):
        raise AssertionError('assembled anyway')

    monkeypatch.setattr(assembler, 'assemble', never)
    with pytest.raises(FileNotFoundError):
        assemble_file(str(asm), str(tmp_path / 'nowhere' / 'Add.hack'))
    with pytest.raises(IsADirectoryError):
        assemble_file(str(asm), str(tmp_path))


def test_check_writable_leaves_no_file(tmp_path):
    oname = tmp_path / 'Add.hack'
    check_writable(str(oname))
    assert not oname.exists()


def test_assemble_file_missing(tmp_path):
    with pytest.raises(OSError):
        assemble_file(str(tmp_path / 'Nope.asm'))
