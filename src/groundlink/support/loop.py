"""
Runs a function repeatedly on a background thread until asked to stop.
"""
import logging
import threading
import time

logger = logging.getLogger(__name__)


class AsyncLoop:
    """ Continually runs a given function on a background thread.
        Exceptions are logged and posted to a given handler
        The background thread is registered as a daemon, so a loop that is never stopped
        runs until the process exits.
    """

    def __init__(self, fn=None, args=(), log=logger, name=None):
        """
        :param fn the function to run
        :param args arguments to pass to fn
        """
        self.fn = fn
        self.args = args
        self.stop_event = threading.Event()
        self.background_thread = None
        self.logger = log
        self.name = name
        self._lock = threading.Lock()

    def start(self):
        """
        Starts the background thread. Has no effect if the thread is already running. A thread that
        has been asked to stop but has not yet exited is kept on rather than a second one being started.
        :return: True if the loop was started or resumed
        """
        with self._lock:
            if self.background_thread is not None:
                if not self.stop_event.is_set():
                    return False
                # a thread still unwinding from stop() carries on as the loop
                self.stop_event.clear()
                return True
            self.stop_event.clear()
            t = threading.Thread(target=self._run, name=self.name)
            t.daemon = True
            self.background_thread = t
        t.start()
        return True

    def exception_handler(self, e):
        self.logger.exception(e)

    def _run(self):
        """ The processing loop for the background thread.
             Invokes the callable for as long as the stop signal is not received.
        """
        self._do(self.startup)
        while self._continue():
            self._do(self.loop)
        self._do(self.shutdown)
        self.logger.info("background thread exiting")

    def _continue(self):
        """ decides under the lock whether to go round again. A thread that stops gives up its place
            as the background thread before it exits, so start() then begins a new one. """
        with self._lock:
            if self.running():
                return True
            if self.background_thread is threading.current_thread():
                self.background_thread = None
            return False

    def _do(self, callme):
        """ runs a function and captures any exceptions """
        try:
            time.sleep(0)
            callme()
        except Exception as e:
            time.sleep(0)
            self.exception_handler(e)

    def startup(self):
        """ template method called when the thread starts"""
        pass

    def loop(self):
        self.fn(*self.args)

    def shutdown(self):
        """ template method called when the thread exits """
        pass

    def running(self):
        return not self.stop_event.is_set()

    @property
    def alive(self):
        thread = self.background_thread
        return thread is not None and thread.is_alive()

    def stop(self, timeout=None):
        """ signals the loop to stop and waits for the thread to finish, unless called from the loop itself.
            If the wait times out the thread stays registered, and alive stays True, until it exits. """
        self.stop_event.set()
        with self._lock:
            thread = self.background_thread
        if thread and thread is not threading.current_thread():
            thread.join(timeout)
