"""Supporting utilities: filesystem inode lookup and profiling."""
