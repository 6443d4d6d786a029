# pygame front end: window, beeper, keyboard and the two clocks driving the machine
import argparse
import array
import logging
import math
import os
import sys

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame
from pygame.locals import (
    K_1, K_2, K_3, K_4,
    K_q, K_w, K_e, K_r,
    K_a, K_s, K_d, K_f,
    K_z, K_x, K_c, K_v,
)

from .constants import DEBUG, DEFAULT_SCALE, DEFAULT_SPEED, SCREEN_HEIGHT, SCREEN_WIDTH, TIMER_HZ
from .cpu import Chip8, MachineState
from .errors import Chip8Error, RomTooLarge

log = logging.getLogger(__name__)

# host key -> CHIP-8 key, laid out like the original COSMAC VIP hex keypad
#   1 2 3 C
#   4 5 6 D
#   7 8 9 E
#   A 0 B F
KEY_MAPPINGS = {
    K_x: 0x0,
    K_1: 0x1,
    K_2: 0x2,
    K_3: 0x3,
    K_q: 0x4,
    K_w: 0x5,
    K_e: 0x6,
    K_a: 0x7,
    K_s: 0x8,
    K_d: 0x9,
    K_z: 0xA,
    K_c: 0xB,
    K_4: 0xC,
    K_r: 0xD,
    K_f: 0xE,
    K_v: 0xF,
}

BLUE = pygame.Color(80, 69, 155, 255)
LIGHT_BLUE = pygame.Color(136, 126, 203, 255)

BEEP_FREQUENCY = 815    # Hz
BEEP_VOLUME = 0.3


# ******************** UTILITIES SECTION
def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 interpreter")
    parser.add_argument("-f", "--file", required=True, help="input rom file")
    parser.add_argument("-s", "--scale", type=int, default=DEFAULT_SCALE,
                        help="size in host pixels of one CHIP-8 pixel")
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED,
                        help="instructions executed per second")
    parser.add_argument("--strict-stack", action="store_true",
                        help="fault on stack overflow/underflow instead of wrapping around")
    parser.add_argument("--dump", action="store_true",
                        help="print the disassembled ROM and exit")
    args = parser.parse_args(argv)
    if args.scale < 1 or args.speed < 1:
        parser.error("scale and speed must be positive")
    return args


def read_keys(keypad, pressed):
    """copy the host keyboard state into the CHIP-8 keypad"""
    for host_key, key in KEY_MAPPINGS.items():
        keypad[key] = pressed[host_key]


def frame_steps(speed, hz=TIMER_HZ):
    """yield how many instructions each frame runs, carrying the remainder of speed/hz to the next frame"""
    owed = 0
    while True:
        steps, owed = divmod(owed + speed, hz)
        yield steps


# ******************** I/O SECTION
class Window:
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=DEFAULT_SCALE, bg_color=BLUE, fg_color=LIGHT_BLUE):
        self.w, self.h, self.scale = w, h, s
        self.background = bg_color
        self.foreground = fg_color
        self.surface = pygame.display.set_mode((w * self.scale, h * self.scale))
        self.surface.fill(self.background)
        pygame.display.flip()

    def refresh(self, display):
        """redraw the whole framebuffer of display"""
        for y, row in enumerate(display.rows()):
            for x, pixel in enumerate(row):
                pygame.draw.rect(
                    self.surface,
                    self.foreground if pixel else self.background,
                    (x * self.scale, y * self.scale, self.scale, self.scale)
                )
        pygame.display.flip()


class Buzzer:
    """one timer tick worth of tone, played whenever the sound timer is running"""

    def __init__(self, frequency=BEEP_FREQUENCY, volume=BEEP_VOLUME):
        self.sound = None
        try:
            pygame.mixer.init(frequency=44100, size=-16, channels=1)
        except pygame.error as e:
            log.warning("No audio device available, sound disabled: %s", e)
            return
        rate, _, channels = pygame.mixer.get_init()
        amplitude = 32767     # signed 16-bit samples
        n_samples = rate // TIMER_HZ
        samples = array.array("h")
        for i in range(n_samples):
            sample = int(amplitude * math.sin(2 * math.pi * frequency * i / rate))
            samples.extend([sample] * channels)
        self.sound = pygame.mixer.Sound(buffer=samples.tobytes())
        self.sound.set_volume(volume)

    def beep(self):
        if self.sound is not None:
            self.sound.play()


# ******************** ENTRY POINT SECTION
def run(chip, window, buzzer, speed=DEFAULT_SPEED):
    """
    drive the machine until the program ends or the user quits

    frames run at the timer rate, each one executes speed/60 instructions
    then ticks the timers once
    """
    clock = pygame.time.Clock()
    pacer = frame_steps(speed)
    while not chip.finished():
        clock.tick(TIMER_HZ)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return
                if event.key == pygame.K_r and event.mod & pygame.KMOD_CTRL:
                    chip.reboot()
                    window.refresh(chip.screen)
        read_keys(chip.keypad, pygame.key.get_pressed())

        if chip.state is MachineState.WAITING:
            key = chip.keypad.first()
            if key is not None:
                chip.deliver_key(key)

        redraw = False
        for _ in range(next(pacer)):
            if chip.state is not MachineState.RUNNING:
                break
            chip.step()
            redraw |= chip.screen.updated
        if redraw:
            window.refresh(chip.screen)

        if chip.tick_timers():
            buzzer.beep()
    log.info("Program finished at 0x%04x", chip.pc)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    chip = Chip8(strict_stack=args.strict_stack)
    try:
        chip.load(args.file)
    except OSError as e:
        sys.exit(f"Failure during ROM open/read\n{e}")
    except RomTooLarge as e:
        sys.exit(str(e))

    if args.dump:
        print("\n".join(chip.dump_rom()))
        return

    pygame.init()
    pygame.display.set_caption(os.path.basename(args.file))
    try:
        window = Window(s=args.scale)
        buzzer = Buzzer()
        run(chip, window, buzzer, speed=args.speed)
    except Chip8Error as e:
        log.error("%s", e)
        sys.exit(f"********** THE EMULATOR CRASHED WITH THE FOLLOWING STATE\n{e}\n{chip}")
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
