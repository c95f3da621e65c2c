"""HTTP interface: authentication, routers and error mapping."""
