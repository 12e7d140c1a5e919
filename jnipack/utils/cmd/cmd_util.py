#
# Copyright 2024 jnipack Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

import subprocess
import time
from threading import Timer

# timeout per llvm-strip call
DEFAULT_TIMEOUT_SECOND = 10 * 60


def exec_command(command, timeout_second=DEFAULT_TIMEOUT_SECOND):
    """Run ``command`` and return ``(err_code, output)``.

    ``command`` is either a shell string or an argument list; stderr is merged
    into the returned output. The process is killed after ``timeout_second``.
    """
    start_mills = int(time.time() * 1000)
    try:
        popen = subprocess.Popen(
            command,
            shell=isinstance(command, str),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except OSError as e:
        # same code the shell reports for a command it cannot run
        return 127, str(e)
    timer = Timer(timeout_second, lambda process: process.kill(), [popen])
    try:
        timer.start()
        stdout, _ = popen.communicate()
    finally:
        timer.cancel()
    err_code = popen.returncode
    err_msg = bytes.decode(stdout or b"", "UTF-8", errors="replace")
    if err_code == -9 and not err_msg:
        use_time = int(time.time() * 1000) - start_mills
        err_msg = f"Failed for timeout({err_code}), use_time: {use_time}ms"
    return err_code, err_msg
