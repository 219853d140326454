# site_config.py
from __future__ import annotations

from pathlib import Path
from typing import Dict

# Single-node settings; the Hadoop version never changes these.
CORE_SITE = """<configuration>
    <property>
        <name>fs.defaultFS</name>
        <value>hdfs://localhost:9000</value>
    </property>
    <property>
        <name>hadoop.http.staticuser.user</name>
        <value>runner</value>
    </property>
</configuration>"""

HDFS_SITE = """<configuration>
    <property>
        <name>dfs.replication</name>
        <value>1</value>
    </property>
    <property>
        <name>dfs.webhdfs.enabled</name>
        <value>true</value>
    </property>
    <property>
        <name>dfs.namenode.http-address</name>
        <value>localhost:9870</value>
    </property>
    <property>
        <name>dfs.secondary.http.address</name>
        <value>localhost:9100</value>
    </property>
</configuration>"""

CONF_DIR = Path("etc") / "hadoop"

SITE_FILES: Dict[str, str] = {
    "core-site.xml": CORE_SITE,
    "hdfs-site.xml": HDFS_SITE,
}


def write_site_config(hadoop_home: str | Path) -> list[Path]:
    """
    Overwrite core-site.xml and hdfs-site.xml under <hadoop_home>/etc/hadoop.

    Existing content is replaced, never merged. Returns the written paths.
    """
    conf_dir = Path(hadoop_home) / CONF_DIR
    conf_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for name, body in SITE_FILES.items():
        path = conf_dir / name
        path.write_bytes(body.encode("utf-8"))
        written.append(path)
    return written
