"""Process snapshots and kills backed by psutil."""

import psutil

from proctop.models import ProcessRecord, ProcessTable


class ProcessMonitor:
    """
    Snapshot provider that reads the OS process table using psutil.

    Handles NoSuchProcess, AccessDenied and ZombieProcess errors gracefully:
    processes that vanish or hide mid-read are left out of the snapshot, and a
    kill that cannot be delivered is reported as a plain False.
    """

    # Attributes to fetch per process
    ATTRS = ["pid", "name", "cpu_percent", "memory_info"]

    def enumerate(self) -> ProcessTable:
        """
        Collect snapshots of all running processes.

        psutil caches Process objects between process_iter() calls, so CPU
        percentages are measured against the previous enumerate(). The first
        reading of each process is 0.0.
        """
        processes: list[ProcessRecord] = []

        for proc in psutil.process_iter(attrs=self.ATTRS):
            try:
                info = proc.info

                # Get memory RSS, defaulting to 0 if unavailable
                mem_info = info.get("memory_info")
                memory_rss = mem_info.rss if mem_info else 0

                processes.append(
                    ProcessRecord(
                        pid=info.get("pid", proc.pid),
                        name=info.get("name") or "",
                        cpu_percent=info.get("cpu_percent") or 0.0,
                        memory_rss=memory_rss,
                    )
                )
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                # Process died mid-poll, is hidden from us, or is a zombie
                continue

        return tuple(processes)

    def terminate(self, pid: int) -> bool:
        """Send SIGKILL to ``pid``. Returns False if it could not be delivered."""
        try:
            psutil.Process(pid).kill()
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
            return False
        return True
