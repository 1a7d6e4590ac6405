"""Predefined osquery SQL.

Plain data: nothing here talks to osquery.  Queries are passed to
``osqueryi`` verbatim; the engine itself only accepts read-only SQL.
"""

from __future__ import annotations

LIST_TABLES = "SELECT name FROM osquery_registry WHERE active = 1"

TOP_CPU_PROCESSES = (
    "SELECT name, pid, uid, cpu_time, "
    "ROUND((cpu_time * 100.0 / (SELECT SUM(cpu_time) FROM processes)), 2) AS cpu_percent "
    "FROM processes ORDER BY cpu_time DESC LIMIT 10"
)

TOP_MEMORY_PROCESSES = (
    "SELECT name, pid, uid, "
    "ROUND(resident_size / 1024.0 / 1024.0, 2) AS resident_mb, "
    "ROUND(total_size / 1024.0 / 1024.0, 2) AS total_mb "
    "FROM processes ORDER BY resident_size DESC LIMIT 10"
)

NETWORK_CONNECTIONS = (
    "SELECT DISTINCT p.name, p.pid, pos.local_address, pos.local_port, "
    "pos.remote_address, pos.remote_port, pos.state "
    "FROM process_open_sockets pos "
    "JOIN processes p ON pos.pid = p.pid "
    "WHERE pos.state = 'ESTABLISHED' OR pos.state = 'LISTEN'"
)

# macOS only; other platforms report "no such table".
TEMPERATURE_SENSORS = "SELECT name, celsius FROM temperature_sensors"

FAN_SENSORS = "SELECT name, actual_speed, min_speed, max_speed FROM fan_control_sensors"

DISK_MOUNTS = (
    "SELECT path, type, "
    "ROUND(blocks_available * blocks_size / 1024.0 / 1024.0 / 1024.0, 2) AS free_gb, "
    "ROUND(blocks * blocks_size / 1024.0 / 1024.0 / 1024.0, 2) AS total_gb, "
    "ROUND(100.0 - (blocks_available * 100.0 / blocks), 2) AS used_percent, "
    "inodes_free "
    "FROM mounts WHERE path = '/' OR (blocks > 0 AND path LIKE '/Volumes/%')"
)

SUSPICIOUS_PROCESSES = (
    "SELECT * FROM ("
    "SELECT pid, name, path, parent, uid, on_disk, "
    "CASE "
    "WHEN parent NOT IN (SELECT pid FROM processes) THEN 'no parent process' "
    "WHEN path LIKE '/tmp/%' OR path LIKE '/private/tmp/%' OR path LIKE '/var/tmp/%' "
    "OR path LIKE '/private/var/folders/%' OR path LIKE '/dev/shm/%' "
    "THEN 'running from temp directory' "
    "WHEN path != '' AND path NOT LIKE '%/' || name THEN 'name does not match executable path' "
    "END AS suspicious_reason "
    "FROM processes WHERE pid > 1"
    ") WHERE suspicious_reason IS NOT NULL"
)

TOP_DISK_IO_PROCESSES = (
    "SELECT name, pid, uid, "
    "ROUND(disk_bytes_read / 1024.0 / 1024.0, 2) AS disk_read_mb, "
    "ROUND(disk_bytes_written / 1024.0 / 1024.0, 2) AS disk_write_mb, "
    "ROUND((disk_bytes_read + disk_bytes_written) / 1024.0 / 1024.0, 2) AS total_disk_mb "
    "FROM processes ORDER BY (disk_bytes_read + disk_bytes_written) DESC LIMIT 15"
)

_TABLE_SCHEMA = "PRAGMA table_info({table})"


def table_schema(table_name: str) -> str:
    """Column listing for *table_name* (substituted as-is)."""
    return _TABLE_SCHEMA.format(table=table_name)


COMMON_QUERIES = """\
Common diagnostic queries:

1. Top CPU consuming processes:
   SELECT name, pid, uid, cpu_time FROM processes ORDER BY cpu_time DESC LIMIT 10

2. Memory usage by process:
   SELECT name, pid, resident_size, total_size FROM processes ORDER BY resident_size DESC LIMIT 10

3. Network connections:
   SELECT pid, local_address, local_port, remote_address, remote_port, state FROM process_open_sockets WHERE state = 'ESTABLISHED'

4. Recently modified files in home directory:
   SELECT path, mtime, size FROM file WHERE path LIKE '/Users/%' AND mtime > (strftime('%s', 'now') - 3600)

5. System information:
   SELECT hostname, cpu_brand, physical_memory, hardware_vendor, hardware_model FROM system_info

6. Disk usage:
   SELECT path, blocks_available, blocks, inodes_free FROM mounts WHERE path = '/'

7. Running services (macOS):
   SELECT name, label, program, state FROM launchd WHERE state = 'running'

8. User sessions:
   SELECT user, host, time FROM logged_in_users
"""
