import os

# Qt widgets need a platform plugin; tests run headless unless told otherwise.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
