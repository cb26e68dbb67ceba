from solution_wheel.main import main

main()
