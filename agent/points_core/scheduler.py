"""
Headless one-shot timer backend for the LifecycleController.

  ThreadScheduler  → threading.Timer (headless mode)
  TkScheduler      → root.after / after_cancel, lives in window.py

Both expose call_later(delay_sec, callback) -> handle and cancel(handle).
"""

import threading


class ThreadScheduler:

    def call_later(self, delay_sec, callback):
        timer = threading.Timer(delay_sec, callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle):
        handle.cancel()
