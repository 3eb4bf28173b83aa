"""Stream records straight from a `git log` pipe as they arrive."""

import subprocess

from commitscan import scan_log
from commitscan.profiling import profiled_scan

with subprocess.Popen(["git", "log", "-n", "50"], stdout=subprocess.PIPE) as proc:
    with profiled_scan() as metrics:
        for entry in scan_log(proc.stdout):
            pr = f" (PR #{entry.pr_number})" if entry.pr_number else ""
            print(f"{entry.commit_id[:10]} {entry.subject}{pr}")

print()
print("Scan metrics:", metrics.summary())
