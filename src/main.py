# main.py
"""
Bare-bones entry point: render one sine tone to a WAV file.
No CLI flags; just edit the constants below.

Flow:
  tone.write_tone -> SineOscillator -> WavWriter.write_to_file
"""

import logging
import sys

from src.tone import write_tone

# ===== EDIT HERE (hard-coded constants) =====
FREQUENCY = 440.0          # A4
AMPLITUDE = 0.5            # 50% of full scale
DURATION_SECONDS = 2
OUTPUT_PATH = "audio.wav"

logger = logging.getLogger(__name__)


def main(output_path: str = OUTPUT_PATH) -> int:
    try:
        out_path = write_tone(output_path, FREQUENCY, AMPLITUDE, DURATION_SECONDS)
    except OSError as e:
        logger.error(f"Error: {e}")
        return 1
    logger.info(f"Wrote {out_path} ({FREQUENCY} Hz, {DURATION_SECONDS}s)")
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    sys.exit(main())
