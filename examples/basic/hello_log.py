"""Decode git log output in 3 lines: zero config, zero deps."""

from commitscan import scan_log

log = b"commit abc123\nAuthor: A B <a@example.com>\n\n    Fix the frobnicator (#42)\n"
for entry in scan_log(log):
    print(entry.commit_id, entry.subject, entry.pr_number)
