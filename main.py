import logging
import os

from dotenv import load_dotenv

from wavechord import ChordSession, load_settings
from wavechord.music import PreviewBackend


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="[%(asctime)s] %(levelname)s:%(name)s: %(message)s",
    )


def main() -> None:
    load_dotenv()
    configure_logging()
    log = logging.getLogger("wavechord")

    settings = load_settings()
    backend = PreviewBackend(sample_rate=settings.sample_rate)
    try:
        session = ChordSession(backend, settings)
    except KeyError as exc:
        raise RuntimeError(f"Set WAVECHORD_ROOT to a valid note name ({exc}).") from None
    except ValueError as exc:
        raise RuntimeError(f"Check WAVECHORD_TUNING_HZ: {exc}") from None

    log.info(
        "%s %s on %s @ A4=%.1f Hz",
        session.root,
        ",".join(sorted(session.intervals)),
        session.waveform.value,
        session.tuning_hz,
    )
    try:
        session.play()
        preview = backend.render(1000)
        for freq in session.frequencies:
            print(f"{freq:.2f} Hz")
        log.info("Rendered %d ms preview, peak %.1f dBFS", len(preview), preview.max_dBFS)
        session.stop()
    except KeyboardInterrupt:
        log.info("Shutting down wavechord.")


if __name__ == "__main__":
    main()
