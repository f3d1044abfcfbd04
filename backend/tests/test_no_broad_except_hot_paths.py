from pathlib import Path
import unittest


ROOT = Path(__file__).resolve().parents[2]
HOT_PATHS = [
    ROOT / "frontend" / "server.py",
    ROOT / "backend" / "towers_of_hanoi" / "api" / "serde.py",
    ROOT / "backend" / "towers_of_hanoi" / "api" / "facade.py",
    ROOT / "backend" / "towers_of_hanoi" / "sequencer.py",
]
ALLOWED_PATTERNS = {
    "except Exception:\n            LOGGER.exception(\"api_get_unhandled\"",
    "except Exception:\n            LOGGER.exception(\"json_read_unhandled\"",
    "except Exception:\n            LOGGER.exception(\"api_post_unhandled\"",
    # auto-solve collaborator boundaries
    "except Exception:\n            LOGGER.exception(\"autosolve_callback_failed\"",
    "except Exception:\n            LOGGER.exception(\"autosolve_animation_failed\"",
    "except Exception:\n            LOGGER.exception(\"autosolve_step_failed\"",
}


class TestNoBroadExceptHotPaths(unittest.TestCase):
    def test_broad_catches_only_at_boundaries(self):
        violations = []
        for path in HOT_PATHS:
            content = path.read_text(encoding="utf-8")
            idx = 0
            while True:
                idx = content.find("except Exception:", idx)
                if idx < 0:
                    break
                segment = content[idx: idx + 96]
                if not any(segment.startswith(allowed) for allowed in ALLOWED_PATTERNS):
                    line = content.count("\n", 0, idx) + 1
                    violations.append(f"{path.relative_to(ROOT)}:{line}")
                idx += 1
        self.assertEqual(
            violations,
            [],
            msg="Broad except guard failed for hot paths: " + ", ".join(violations),
        )


if __name__ == "__main__":
    unittest.main()
