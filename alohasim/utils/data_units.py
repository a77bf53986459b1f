import copy


class DataUnit:
    """Abstract base class for all data units exchanged during the simulation."""

    def __init__(self, creation_time_s: float):
        """
        Initializes a DataUnit.

        Args:
            creation_time_s (float): The time of creation in seconds.
        """
        self.creation_time_s: float = creation_time_s  # When the data unit was created

        self.type: str | None = None  # Type of the data unit

    def __repr__(self):
        return f"creation_time={self.creation_time_s}"


class Packet(DataUnit):
    def __init__(
        self,
        id: int,
        creation_time_s: float,
        id_transmitter: int | None = None,
        id_channel: int | None = None,
    ):
        """
        Initializes a Packet.

        Args:
            id (int): The ID of the packet (unique per transmitter).
            creation_time_s (float): The logical arrival time of the packet in seconds.
            id_transmitter (int, optional): The ID of the transmitter owning the packet.
            id_channel (int, optional): The sub-channel the packet is sent over.
        """
        super().__init__(creation_time_s)

        self.id: int = id

        self.id_transmitter: int | None = id_transmitter
        self.id_channel: int | None = id_channel
        self.id_gate: int | None = None  # Gate the packet arrived from at the channel

        self.reception_time_s: float | None = None  # When the packet reached a receiver

        self.type: str = "DATA"

    def dup(self) -> "Packet":
        """Returns an independent copy of the packet to be put on the medium."""
        return copy.copy(self)

    def __repr__(self):
        return f"{self.__class__.__name__}(id={self.id}, tx={self.id_transmitter}, ch={self.id_channel}, {super().__repr__()})"


class Feedback(DataUnit):
    """Reply sent by the channel to a transmitter at the end of a slot."""

    def __init__(self, id_gate: int, creation_time_s: float):
        """
        Initializes a Feedback frame.

        Args:
            id_gate (int): The gate of the transmitter the frame is addressed to.
            creation_time_s (float): The time of creation in seconds.
        """
        super().__init__(creation_time_s)

        self.id_gate: int = id_gate

    def __repr__(self):
        return f"{self.__class__.__name__}(gate={self.id_gate})"


class ACK(Feedback):
    def __init__(self, id_gate: int, creation_time_s: float):
        super().__init__(id_gate, creation_time_s)

        self.type: str = "ACK"


class NACK(Feedback):
    def __init__(self, id_gate: int, creation_time_s: float):
        super().__init__(id_gate, creation_time_s)

        self.type: str = "NACK"


class PROMPT(Feedback):
    """Sent to transmitters that neither attempted nor were replied to in the slot."""

    def __init__(self, id_gate: int, creation_time_s: float):
        super().__init__(id_gate, creation_time_s)

        self.type: str = "PROMPT"
