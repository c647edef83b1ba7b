from typing import Optional
import datetime
import decimal

from sqlalchemy import Boolean, DECIMAL, Date, DateTime, ForeignKey, Index, Integer, String, Text, Time, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from presensi.database import Base


class Pengaturan(Base):
    __tablename__ = 'pengaturan'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    lat_kantor: Mapped[decimal.Decimal] = mapped_column(DECIMAL(10, 8), nullable=False, server_default=text('-6.20000000'))
    long_kantor: Mapped[decimal.Decimal] = mapped_column(DECIMAL(11, 8), nullable=False, server_default=text('106.81666600'))
    radius_meter: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text('100'))
    alamat_kantor: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())


class Karyawan(Base):
    __tablename__ = 'karyawan'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nik: Mapped[str] = mapped_column(String(16), nullable=False, unique=True, comment='16 digit angka NIK')
    nama: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(100), unique=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20))
    is_activated: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text('0'))
    pin: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    presensi: Mapped[list['Presensi']] = relationship('Presensi', back_populates='karyawan', cascade='all, delete-orphan')


class Presensi(Base):
    __tablename__ = 'presensi'
    __table_args__ = (
        Index('unique_employee_date', 'id_karyawan', 'tanggal', unique=True),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    id_karyawan: Mapped[int] = mapped_column(ForeignKey('karyawan.id', ondelete='CASCADE'), nullable=False)
    tanggal: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    jam_masuk: Mapped[Optional[datetime.time]] = mapped_column(Time)
    jam_keluar: Mapped[Optional[datetime.time]] = mapped_column(Time)
    lat_masuk: Mapped[Optional[decimal.Decimal]] = mapped_column(DECIMAL(10, 8))
    long_masuk: Mapped[Optional[decimal.Decimal]] = mapped_column(DECIMAL(11, 8))
    lat_keluar: Mapped[Optional[decimal.Decimal]] = mapped_column(DECIMAL(10, 8))
    long_keluar: Mapped[Optional[decimal.Decimal]] = mapped_column(DECIMAL(11, 8))
    distance_in: Mapped[Optional[decimal.Decimal]] = mapped_column(DECIMAL(8, 2))
    distance_out: Mapped[Optional[decimal.Decimal]] = mapped_column(DECIMAL(8, 2))
    status: Mapped[str] = mapped_column(String(20), nullable=False, server_default=text("'hadir'"))
    keterangan: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    karyawan: Mapped['Karyawan'] = relationship('Karyawan', back_populates='presensi')
