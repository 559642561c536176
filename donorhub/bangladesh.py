"""
Bangladesh district / upazila reference data used by registration forms
and the donor search filters.
"""

DISTRICT_UPAZILAS = {
    'Dhaka': ['Mirpur', 'Uttara', 'Gulshan', 'Dhanmondi', 'Motijheel', 'Banani', 'Farmgate', 'Mohammadpur'],
    'Chittagong': ['Chandgaon', 'Kotwali', 'Panchlaish', 'Khulshi', 'Double Mooring', 'Pahartali'],
    'Khulna': ['Khulna Sadar', 'Sonadanga', 'Daulatpur', 'Khalishpur', 'Boyra'],
    'Rajshahi': ['Rajshahi Sadar', 'Boalia', 'Motihar', 'Shah Makhdum'],
    'Sylhet': ['Sylhet Sadar', 'Kotwali', 'Jalalabad', 'Mogla Bazar', 'Bandar Bazar'],
    'Barisal': ['Barisal Sadar', 'Kotwali', 'Babuganj', 'Bakerganj', 'Gournadi'],
    'Rangpur': ['Rangpur Sadar', 'Kotwali', 'Pirgachha', 'Badarganj', 'Haragachh'],
    'Mymensingh': ['Mymensingh Sadar', 'Trishal', 'Gafargaon', 'Fulbaria', 'Ishwarganj'],
    'Comilla': ['Comilla Sadar', 'Kotwali', 'Chandina', 'Daudkandi', 'Homna'],
    'Narayanganj': ['Narayanganj Sadar', 'Fatullah', 'Bandar', 'Rupganj', 'Sonargaon'],
}


def get_districts():
    return list(DISTRICT_UPAZILAS)


def get_upazilas(district):
    """Upazilas of ``district``; unknown districts give an empty list."""
    return list(DISTRICT_UPAZILAS.get(district, []))
