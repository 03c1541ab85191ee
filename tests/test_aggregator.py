"""Tests for per-port aggregation"""

import random
import unittest

from devscan_cli.aggregator import RESERVED_PORT, aggregate
from devscan_cli.models import LabeledListener


def labeled(port: int, pid: int, process: str = "node", service: str = "React/Next.js") -> LabeledListener:
    return LabeledListener(port=port, process_name=process, pid=pid, service=service)


class TestAggregate(unittest.TestCase):
    """Tests for aggregate()"""

    def test_merges_pids_on_same_port(self):
        servers = aggregate([labeled(3000, 111), labeled(3000, 222)])

        self.assertEqual(len(servers), 1)
        server = servers[0]
        self.assertEqual(server.port, 3000)
        self.assertEqual(server.pid, 111)
        self.assertEqual(server.pids, (111, 222))

    def test_first_record_wins(self):
        servers = aggregate(
            [
                labeled(3000, 1, process="bun", service="Bun Server"),
                labeled(3000, 2, process="node", service="React/Next.js"),
            ]
        )
        self.assertEqual(servers[0].service, "Bun Server")
        self.assertEqual(servers[0].process_name, "bun")

    def test_repeated_pid_kept(self):
        """A process reported once per socket keeps both entries"""
        servers = aggregate([labeled(3000, 111), labeled(3000, 111)])
        self.assertEqual(servers[0].pids, (111, 111))

    def test_sorted_by_port(self):
        servers = aggregate([labeled(8000, 3), labeled(3000, 1), labeled(5173, 2)])
        self.assertEqual([s.port for s in servers], [3000, 5173, 8000])

    def test_reserved_port_excluded(self):
        servers = aggregate([labeled(RESERVED_PORT, 1), labeled(3000, 2)])
        self.assertEqual([s.port for s in servers], [3000])

    def test_custom_reserved_ports(self):
        servers = aggregate([labeled(1420, 1), labeled(3000, 2)], reserved_ports=(3000,))
        self.assertEqual([s.port for s in servers], [1420])

    def test_empty_input(self):
        self.assertEqual(aggregate([]), [])

    def test_ports_unique_for_random_input(self):
        rng = random.Random(1234)
        for _ in range(50):
            records = [labeled(rng.choice([1420, 3000, 3001, 5173, 8000, 8888]), rng.randint(1, 9999)) for _ in range(20)]
            servers = aggregate(records)
            ports = [s.port for s in servers]

            self.assertEqual(len(ports), len(set(ports)))
            self.assertNotIn(RESERVED_PORT, ports)
            self.assertEqual(ports, sorted(ports))
            for server in servers:
                self.assertTrue(server.pids)
                self.assertEqual(server.pid, server.pids[0])
            self.assertEqual(
                sum(len(s.pids) for s in servers),
                sum(1 for r in records if r.port != RESERVED_PORT),
            )


if __name__ == "__main__":
    unittest.main()
