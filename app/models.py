"""SQLAlchemy ORM models for the EnerTrack device history tables."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, func

from app.database import Base


class User(Base):
    """An application account. Only read by the history service."""

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True)

    def __repr__(self):
        return f"<User(user_id={self.user_id}, username={self.username!r})>"


class Kategori(Base):
    """Device category reference data (e.g. "Dapur", "Penerangan")."""

    __tablename__ = "kategori"

    kategori_id = Column(Integer, primary_key=True, autoincrement=True)
    nama_kategori = Column(String(100), nullable=False)

    def __repr__(self):
        return (
            f"<Kategori(kategori_id={self.kategori_id}, "
            f"nama_kategori={self.nama_kategori!r})>"
        )


class RiwayatPerangkat(Base):
    """One logged device usage entry owned by a user.

    Attributes:
        id: Auto-incremented primary key.
        user_id: Owner of the entry.
        nama_perangkat: Device name as entered by the user.
        merek: Device brand. Nullable in storage; rows without a brand
               cannot be served as history items.
        daya: Power draw in watts.
        durasi: Usage duration in hours.
        tanggal_input: When the entry was recorded.
        kategori_id: Category of the device.
    """

    __tablename__ = "riwayat_perangkat"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    nama_perangkat = Column(String(255), nullable=False)
    merek = Column(String(255), nullable=True)
    daya = Column(Float, nullable=False)
    durasi = Column(Float, nullable=False)
    tanggal_input = Column(DateTime, nullable=False, server_default=func.now())
    kategori_id = Column(Integer, ForeignKey("kategori.kategori_id"), nullable=False)

    __table_args__ = (Index("idx_riwayat_user_id", "user_id"),)

    def __repr__(self):
        return (
            f"<RiwayatPerangkat(id={self.id}, user_id={self.user_id}, "
            f"nama_perangkat={self.nama_perangkat!r}, daya={self.daya})>"
        )
