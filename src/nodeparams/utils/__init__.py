"""Low-level socket helpers for port probing and local address lookup.

The utils layer sits in the middle of the diamond DAG and depends only on
the standard library. It raises plain ``OSError``; translation into the
typed startup errors happens in [nodeparams.core][nodeparams.core].

Attributes:
    network: TCP port availability probe, ephemeral port allocation,
        listener creation and local IPv4 lookup.

Note:
    The utils layer has **zero** imports from ``nodeparams.core``. This
    strict dependency boundary keeps the diamond DAG intact.

Examples:
    ```python
    from nodeparams.utils.network import check_port_available, get_available_port

    port = 19530 if check_port_available(19530) else get_available_port()
    ```
"""
