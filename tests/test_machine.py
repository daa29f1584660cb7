import logging

import pytest

from chip8vm import Chip8, Op
from chip8vm.errors import InvalidKeyIndex, ProgramTooLarge, StackUnderflow, UnknownOpcode
from chip8vm.log import set_logs


def test_set_then_add_scenario(vm):
    vm.load_program(bytes([0x60, 0x05, 0x70, 0x03]))
    vm.step()
    vm.step()
    assert vm.V[0] == 8
    assert vm.pc == 0x200 + 4


def test_step_returns_executed_instruction(vm):
    vm.load_hex("6005")
    ins = vm.step()
    assert ins.op is Op.LD_VX_KK
    assert ins.kk == 5


def test_delay_timer_counts_down_once_per_step(vm):
    vm.state.V[2] = 2
    vm.load_hex("F215 6000 6000")
    vm.step()
    assert vm.delay_timer == 1
    vm.step()
    assert vm.delay_timer == 0
    vm.step()
    assert vm.delay_timer == 0


def test_sound_stop_event(vm):
    events = []
    vm.push_handlers(on_sound_stop=lambda: events.append(vm.sound_timer))
    vm.load_hex("6102 F118 6000 6000")
    vm.step()
    vm.step()
    assert vm.sound_timer == 1
    assert not vm.sound_stopped
    vm.step()
    assert vm.sound_stopped
    assert events == [0]
    vm.step()
    assert not vm.sound_stopped
    assert events == [0]


def test_call_then_return(vm):
    # 200: CALL 206 / 202: LD V0, 1 / 206: RET
    vm.load_hex("2206 6001 0000 00EE")
    vm.step()
    assert vm.pc == 0x206
    assert vm.state.sp == 1
    vm.step()
    assert vm.pc == 0x202
    assert vm.state.sp == 0
    vm.step()
    assert vm.V[0] == 1


def test_unknown_opcode_leaves_machine_untouched(vm):
    vm.load_hex("0123")
    vm.state.delay = 5
    with pytest.raises(UnknownOpcode) as excinfo:
        vm.step()
    assert excinfo.value.word == 0x0123
    assert excinfo.value.address == 0x200
    assert vm.pc == 0x200
    assert vm.delay_timer == 5
    assert vm.cycle_count == 0


def test_skip_steps_over_unknown_opcode(vm):
    vm.load_hex("0123 6007")
    vm.state.delay = 5
    vm.skip()
    assert vm.pc == 0x202
    assert vm.delay_timer == 4
    vm.step()
    assert vm.V[0] == 7


def test_return_without_call(vm):
    vm.load_hex("00EE")
    with pytest.raises(StackUnderflow):
        vm.step()
    assert vm.pc == 0x200


def test_wait_for_key_blocks_until_pressed(vm):
    vm.load_hex("F30A 6001")
    vm.state.delay = 10
    for _ in range(3):
        vm.step()
    assert vm.pc == 0x200
    assert vm.delay_timer == 7
    vm.set_key(7, True)
    vm.step()
    assert vm.V[3] == 7
    assert vm.pc == 0x202


def test_run_frame_runs_cycles_per_frame_steps():
    vm = Chip8(cycles_per_frame=20)
    vm.load_hex("1200")  # jump to self
    vm.state.delay = 30
    vm.run_frame()
    assert vm.cycle_count == 20
    assert vm.delay_timer == 10
    vm.run_frame(cycles=5)
    assert vm.cycle_count == 25
    assert vm.delay_timer == 5


def test_draw_sets_redraw_flag(vm):
    vm.load_hex("A000 D005")
    vm.should_draw = False
    vm.step()
    assert not vm.should_draw
    vm.step()
    assert vm.should_draw
    assert vm.vram.sum() == 14


def test_initialize_resets_a_running_machine(vm):
    vm.load_hex("6005 7003")
    vm.step()
    vm.initialize()
    assert vm.pc == 0x200
    assert vm.cycle_count == 0
    assert vm.V[0] == 0
    assert vm.state.memory[0x200] == 0


def test_load_errors_surface_from_machine(vm):
    with pytest.raises(ProgramTooLarge):
        vm.load_program(bytes(4000))
    with pytest.raises(InvalidKeyIndex):
        vm.set_key(16, True)
    with pytest.raises(ValueError):
        vm.load_hex("60 0")


def test_trace_logging(vm, caplog):
    caplog.set_level(logging.DEBUG, logger="chip8vm")
    vm.load_hex("6005")
    set_logs(True)
    try:
        vm.step()
    finally:
        set_logs(False)
    assert "200: 6005  LD V0, 0x05" in caplog.text


@pytest.mark.parametrize("program, message", [
    ("6105 6203 8121", "V1 = V1 OR V2 -> 7"),
    ("6181 8106", "Shift V1 right by 1: 64, least significant bit=1"),
    ("6107 3107", "Skip next instruction: V1 == 7"),
    ("6109 F115", "Delay timer = V1 (9)"),
    ("6109 F118", "Sound timer = V1 (9)"),
    ("F20A", "Waiting for a key press into V2"),
])
def test_handlers_log_what_they_did(vm, caplog, program, message):
    caplog.set_level(logging.DEBUG, logger="chip8vm")
    vm.load_hex(program)
    set_logs(True)
    try:
        for _ in range(len(program.split())):
            vm.step()
    finally:
        set_logs(False)
    assert message in caplog.text
