"""
points_core — CashPlay Points Agent v1.0
========================================
Architecture: one LifecycleController, cycles on short-lived worker threads.

  constants.py   → Version, timing defaults, capacities, theme
  config.py      → Paths, logging, settings load/save, server URL
  http_client.py → HTTP session with pooling + GET-only retry + CA bundle
  errors.py      → ValidationError, NetworkError, ProtocolError, DecodeError
  models.py      → RunConfig, AccountSnapshot, CycleOutcome
  validation.py  → Settings validator (gates start)
  api.py         → AccountClient (getUser / addPointGame)
  event_log.py   → Bounded event log (last 100 entries)
  state.py       → RunState + Stats counters
  cycle.py       → run_cycle(): read → grant → settle → re-read → diff
  scheduler.py   → threading one-shot timer (headless)
  controller.py  → LifecycleController (Idle/Running, periodic timer)
  window.py      → Tkinter operator window + TkScheduler
  runner.py      → main() — GUI or --headless
"""
